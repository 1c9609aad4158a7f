"""Registry of plugins and their per-room instances."""

from __future__ import annotations

import logging

from halkit.core.errors import PluginNotFoundError
from halkit.models.plugin import Instance, Plugin

logger = logging.getLogger("halkit.plugins")


class InstanceRef:
    """Non-owning handle to an instance held by a :class:`PluginRegistry`.

    Events carry one of these instead of the instance itself, so detaching
    an instance never has to chase down events that still point at it.
    """

    __slots__ = ("instance_id", "registry")

    def __init__(self, registry: PluginRegistry, instance_id: str) -> None:
        self.registry = registry
        self.instance_id = instance_id

    def resolve(self) -> Instance | None:
        """Return the instance, or ``None`` if it has been detached."""
        return self.registry.get_instance(self.instance_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InstanceRef):
            return NotImplemented
        return self.registry is other.registry and self.instance_id == other.instance_id

    def __hash__(self) -> int:
        return hash((id(self.registry), self.instance_id))

    def __repr__(self) -> str:
        return f"InstanceRef({self.instance_id!r})"


class PluginRegistry:
    """In-process plugin registry."""

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}
        self._instances: dict[str, Instance] = {}

    def register(self, plugin: Plugin) -> Plugin:
        if plugin.name in self._plugins:
            logger.debug("Replacing registered plugin %s", plugin.name)
        self._plugins[plugin.name] = plugin
        return plugin

    def get_plugin(self, name: str) -> Plugin | None:
        return self._plugins.get(name)

    @property
    def plugins(self) -> list[Plugin]:
        return list(self._plugins.values())

    def attach(self, plugin_name: str, room_id: str = "", broker: str = "") -> InstanceRef:
        """Create an instance of a registered plugin and return a handle to it."""
        plugin = self._plugins.get(plugin_name)
        if plugin is None:
            raise PluginNotFoundError(plugin_name)
        instance = Instance(plugin=plugin, room_id=room_id, broker=broker)
        self._instances[instance.id] = instance
        logger.debug("Attached plugin %s to room %r (instance %s)", plugin_name, room_id, instance.id)
        return InstanceRef(self, instance.id)

    def detach(self, instance_id: str) -> bool:
        """Remove an instance. Returns ``True`` if it existed."""
        return self._instances.pop(instance_id, None) is not None

    def get_instance(self, instance_id: str) -> Instance | None:
        return self._instances.get(instance_id)

    def list_instances(self, room_id: str | None = None) -> list[Instance]:
        if room_id is None:
            return list(self._instances.values())
        return [i for i in self._instances.values() if i.room_id == room_id]
