"""Core services: system registry, scanner, tags, covers, saves."""
from retrohost.core.library import Library
from retrohost.core.systems import SystemRegistry, default_registry

__all__ = ["Library", "SystemRegistry", "default_registry"]
