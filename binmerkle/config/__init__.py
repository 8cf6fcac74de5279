"""
Runtime Configuration Module

Provides configuration loading for tree construction.
"""

from .runtime import ENV_PREFIX, TreeConfig

__all__ = [
    "ENV_PREFIX",
    "TreeConfig",
]
