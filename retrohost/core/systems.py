"""Registry of supported systems: lookup by id and by file extension."""
from typing import Dict, Iterable, Iterator, Optional, Tuple

from retrohost.models.system import SystemDescriptor

DEFAULT_SYSTEMS: Tuple[SystemDescriptor, ...] = (
    SystemDescriptor(id="gb", name="Game Boy", core="gb", extensions=(".gb",)),
    SystemDescriptor(id="gbc", name="Game Boy Color", core="gb", extensions=(".gbc",)),
    SystemDescriptor(id="gba", name="Game Boy Advance", core="vba_next", extensions=(".gba",)),
    SystemDescriptor(id="nes", name="NES", core="nes", extensions=(".nes",)),
    SystemDescriptor(id="snes", name="SNES", core="snes", extensions=(".smc", ".sfc")),
)


class SystemRegistry:
    """Immutable lookup table over an ordered list of systems.

    Raises ValueError at construction if two systems share an id or an
    extension; lookups never raise.
    """

    def __init__(self, systems: Iterable[SystemDescriptor]) -> None:
        self._systems: Tuple[SystemDescriptor, ...] = tuple(systems)
        self._by_id: Dict[str, SystemDescriptor] = {}
        self._by_ext: Dict[str, SystemDescriptor] = {}
        for system in self._systems:
            if system.id in self._by_id:
                raise ValueError(f"duplicate system id: {system.id!r}")
            self._by_id[system.id] = system
            for ext in system.extensions:
                ext = _normalize_extension(ext)
                owner = self._by_ext.get(ext)
                if owner is not None:
                    raise ValueError(
                        f"extension {ext!r} claimed by both {owner.id!r} and {system.id!r}"
                    )
                self._by_ext[ext] = system

    def by_id(self, system_id: str) -> Optional[SystemDescriptor]:
        return self._by_id.get(system_id)

    def by_extension(self, ext: str) -> Optional[SystemDescriptor]:
        """Return the system owning ext ('.gb' or 'gb', any case), or None."""
        return self._by_ext.get(_normalize_extension(ext))

    def all(self) -> Tuple[SystemDescriptor, ...]:
        return self._systems

    def __iter__(self) -> Iterator[SystemDescriptor]:
        return iter(self._systems)

    def __len__(self) -> int:
        return len(self._systems)

    def __contains__(self, system_id: object) -> bool:
        return system_id in self._by_id


def _normalize_extension(ext: str) -> str:
    ext = ext.lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


def default_registry() -> SystemRegistry:
    """Registry of the built-in systems."""
    return SystemRegistry(DEFAULT_SYSTEMS)
