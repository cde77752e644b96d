"""Technique auto-discovery and registration.

Scans margin_tool/techniques/ for modules that define a `technique` object
of type Technique. Collects them into a dict keyed by name.
"""

import importlib
import pkgutil

from margin_tool.core.types import Technique

_registry: dict[str, Technique] = {}


def discover() -> dict[str, Technique]:
    """Import all technique modules and return the registry."""
    if _registry:
        return _registry

    import margin_tool.techniques as pkg

    for _importer, modname, _ispkg in pkgutil.iter_modules(pkg.__path__):
        if modname.startswith('_'):
            continue
        tech = getattr(importlib.import_module(f'margin_tool.techniques.{modname}'), 'technique', None)
        if isinstance(tech, Technique):
            _registry[tech.name] = tech

    return _registry


def get(name: str) -> Technique:
    """Get a technique by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown technique: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_techniques() -> dict[str, Technique]:
    """Return all registered techniques."""
    return discover()
