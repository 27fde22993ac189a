"""Service layer: wraps the pure engine with caching, telemetry, and
the ServiceResult contract consumed by the CLI.
"""
