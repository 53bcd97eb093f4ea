"""
Entity loaders for bulkbridge.

Loaders are external collaborators selected by entity tag:
- Loader: Abstract interface every entity loader implements
- NoOpLoader: Leaves jobs untouched (tests, dry runs)
- LoaderRegistry: Entity tag -> Loader dispatch
"""

from bulkbridge.loaders.base import Entity, Loader, NoOpLoader
from bulkbridge.loaders.factory import load_loader_factory
from bulkbridge.loaders.registry import LoaderRegistry

__all__ = [
    "Entity",
    "Loader",
    "LoaderRegistry",
    "NoOpLoader",
    "load_loader_factory",
]
