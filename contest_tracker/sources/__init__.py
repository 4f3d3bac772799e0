import importlib
import pkgutil
import logging

logger = logging.getLogger(__name__)

# Merge order of the contest page: CodeChef, then Codeforces, then LeetCode.
DEFAULT_SOURCE_ORDER = ('codechef', 'codeforces', 'leetcode')

_registry = {}


def register_source(cls):
    """Decorator to register an upstream contest source."""
    name = cls.PLATFORM_NAME
    if not name:
        raise ValueError(f"{cls.__name__} does not define PLATFORM_NAME")
    existing = _registry.get(name)
    if existing is not None and existing is not cls:
        raise ValueError(
            f"Platform {name!r} is already registered by {existing.__name__}"
        )
    _registry[name] = cls
    logger.info(f"Registered contest source: {name} ({cls.PLATFORM_DISPLAY})")
    return cls


def get_source_class(platform_name: str):
    return _registry.get(platform_name)


def get_all_sources(order=None):
    """Registered sources keyed by platform name, in merge order.

    Names listed in *order* (default ``DEFAULT_SOURCE_ORDER``) come first.
    Registered sources missing from *order* follow alphabetically, and
    names that are not registered are skipped.
    """
    if order is None:
        order = DEFAULT_SOURCE_ORDER
    names = []
    for name in order:
        if name in _registry and name not in names:
            names.append(name)
    names.extend(sorted(name for name in _registry if name not in names))
    return {name: _registry[name] for name in names}


def get_source_instance(platform_name: str, **kwargs):
    cls = _registry.get(platform_name)
    if cls is None:
        raise ValueError(f"Unknown platform: {platform_name}")
    return cls(**kwargs)


def _auto_discover():
    # A source module that fails to import is a deployment error; let it raise.
    for _, module_name, _ in pkgutil.iter_modules(__path__):
        if module_name != 'base':
            importlib.import_module(f'.{module_name}', package=__package__)


_auto_discover()
