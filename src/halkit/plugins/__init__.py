"""Plugin metadata registry."""

from halkit.plugins.registry import InstanceRef, PluginRegistry

__all__ = ["InstanceRef", "PluginRegistry"]
