"""Domain layer: value projection, extents, scaling, baselines, stacking.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
