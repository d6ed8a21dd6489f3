"""Shared application state (injected into routes)."""
from retrohost.config import Settings, load_settings
from retrohost.core.library import Library
from retrohost.core.systems import SystemRegistry, default_registry


class AppState:
    def __init__(self, settings: Settings, registry: SystemRegistry | None = None) -> None:
        self.settings = settings
        self.registry = registry if registry is not None else default_registry()
        self.library = Library(settings.rom_dir, settings.data_dir, self.registry)


_state: AppState | None = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState(load_settings(with_static=True))
    return _state
