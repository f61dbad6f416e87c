"""Configuration schema and loading for monodeps."""

from .loader import load_config
from .schema import GraphConfig, MonodepsConfig, WorkspaceConfig

__all__ = [
    "GraphConfig",
    "MonodepsConfig",
    "WorkspaceConfig",
    "load_config",
]
