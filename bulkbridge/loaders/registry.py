"""
Loader registry for dispatching entity operations to the right loader.

Maps entity tags (see Entity) to Loader instances. Loader operations
(cmLoad, cmPush, ...) resolve their loader here by `job.entity`.
"""

import logging
from typing import Any, Mapping, Optional, Sequence

from bulkbridge.errors import UnknownEntityError
from bulkbridge.loaders.base import Entity, Loader, NoOpLoader
from bulkbridge.loaders.factory import DEFAULT_ALLOWED_LOADER_MODULES, load_loader_factory

logger = logging.getLogger(__name__)


class LoaderRegistry:
    """
    Registry for loader dispatch by entity tag.

    Usage:
        registry = LoaderRegistry()
        registry.register(Entity.CAMPAIGN, CampaignLoader(...))

        loader = registry.get("Campaign")

        # Or build from config
        registry = LoaderRegistry.create_default(loaders_config, workbook=...)
    """

    def __init__(self) -> None:
        self._loaders: dict[str, Loader] = {}

    def register(self, entity: Entity | str, loader: Loader) -> None:
        """
        Register a loader for an entity tag.

        Args:
            entity: Entity tag (Entity member or its string value)
            loader: Loader instance for this entity
        """
        self._loaders[Entity(entity).value] = loader

    def get(self, entity: Any) -> Loader:
        """
        Get loader for an entity tag.

        Raises:
            UnknownEntityError: If no loader is registered for the tag
        """
        key = entity.value if isinstance(entity, Entity) else entity
        if not isinstance(key, str) or key not in self._loaders:
            raise UnknownEntityError(
                f"No loader registered for entity: {entity}. "
                f"Registered: {self.list_entities()}"
            )
        return self._loaders[key]

    def has(self, entity: Any) -> bool:
        key = entity.value if isinstance(entity, Entity) else entity
        return key in self._loaders

    def list_entities(self) -> list[str]:
        return list(self._loaders.keys())

    @classmethod
    def create_default(
        cls,
        loaders: Optional[Mapping[str, Any]] = None,
        allowed_modules: Sequence[str] = DEFAULT_ALLOWED_LOADER_MODULES,
        **collaborators: Any,
    ) -> "LoaderRegistry":
        """
        Create a registry from loader factory config.

        Each entry maps an entity tag to either a factory path string or
        {"factory": "module:function", "args": {...}}. The factory is called
        with the shared collaborators (workbook, session, id_store) plus args.
        Entities without a configured factory get a NoOpLoader.

        Args:
            loaders: Entity tag -> factory config
            allowed_modules: Loader module allowlist
            **collaborators: Keyword arguments passed to every factory

        Returns:
            Configured LoaderRegistry
        """
        registry = cls()
        loaders = loaders or {}

        unknown = set(loaders) - {e.value for e in Entity}
        if unknown:
            raise UnknownEntityError(f"Loaders configured for unknown entities: {sorted(unknown)}")

        for entity in Entity:
            spec = loaders.get(entity.value)
            if spec is None:
                registry.register(entity, NoOpLoader())
                continue

            if isinstance(spec, str):
                factory_path, args = spec, {}
            else:
                factory_path, args = spec["factory"], spec.get("args", {})

            factory = load_loader_factory(factory_path, allowed_modules)
            registry.register(entity, factory(**collaborators, **args))
            logger.debug(f"Registered loader for {entity.value} from {factory_path}")

        return registry

    @classmethod
    def create_noop(cls) -> "LoaderRegistry":
        """Create a registry with a NoOpLoader for every entity."""
        registry = cls()
        for entity in Entity:
            registry.register(entity, NoOpLoader())
        return registry
