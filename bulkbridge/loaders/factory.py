"""
Secure loader factory resolution.

Loaders live in separate packages so the bridge never imports the advertising
API client. The config names a factory per entity as "module:function";
only modules on the allowlist may be imported.
"""

import importlib
from typing import Any, Callable, Sequence

# Allowlist used when the config does not provide one
DEFAULT_ALLOWED_LOADER_MODULES = [
    "bulkbridge_loaders",
]


def is_allowed_module(module_path: str, allowed: Sequence[str]) -> bool:
    """Check if module is in allowlist (exact match or submodule)."""
    for prefix in allowed:
        if module_path == prefix or module_path.startswith(prefix + "."):
            return True
    return False


def load_loader_factory(
    factory_path: str,
    allowed: Sequence[str] = DEFAULT_ALLOWED_LOADER_MODULES,
) -> Callable[..., Any]:
    """Load a loader factory by dotted path string.

    Args:
        factory_path: e.g. "bulkbridge_loaders.cm:build_campaign_loader"
        allowed: Module prefixes that may be imported

    Returns:
        The callable factory function

    Raises:
        ValueError: If path not in allowlist or malformed
        ImportError: If module not found
        AttributeError: If function not found in module
        TypeError: If attribute is not callable
    """
    if ":" not in factory_path:
        raise ValueError(f"Factory path must be 'module:function', got: {factory_path}")

    module_path, func_name = factory_path.rsplit(":", 1)

    if not is_allowed_module(module_path, allowed):
        raise ValueError(
            f"Loader module '{module_path}' not in allowlist. "
            f"Allowed: {list(allowed)}"
        )

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ImportError(f"Cannot import loader module '{module_path}': {e}") from e

    try:
        factory = getattr(module, func_name)
    except AttributeError as e:
        raise AttributeError(
            f"Loader factory '{func_name}' not found in '{module_path}': {e}"
        ) from e

    if not callable(factory):
        raise TypeError(f"{factory_path} is not callable")

    return factory
