"""Configuration: section models, TOML discovery, settings, logging."""
