"""Catalog, ROM, cover and save operations over one ROM dir and one data dir."""
from pathlib import Path
from typing import List
from urllib.parse import urlencode

from retrohost.core import covers, save_store
from retrohost.core.errors import CoverNotFound, RomNotFound
from retrohost.core.scanner import find_rom_file, scan_roms
from retrohost.core.systems import SystemRegistry, default_registry
from retrohost.core.tag_store import load_tags
from retrohost.models.catalog import Catalog, CatalogEntry, CoverStatus, SystemSummary


class Library:
    """Stateless facade: every call rescans the ROM dir and reloads tags."""

    def __init__(self, rom_dir: Path, data_dir: Path, registry: SystemRegistry | None = None) -> None:
        self.rom_dir = Path(rom_dir)
        self.data_dir = Path(data_dir)
        self.registry = registry if registry is not None else default_registry()

    def scan(self) -> Catalog:
        return scan_roms(self.rom_dir, load_tags(self.data_dir), self.registry)

    def list_systems(self) -> List[SystemSummary]:
        """Systems with at least one ROM, in registry order."""
        catalog = self.scan()
        return [
            SystemSummary(id=s.id, name=s.name, core=s.core, rom_count=len(catalog[s.id]))
            for s in self.registry
            if catalog.get(s.id)
        ]

    def list_roms(self, system_id: str) -> List[CatalogEntry]:
        """Entries for a system; [] if the system is unknown or has no ROMs."""
        return self.scan().get(system_id, [])

    def rom_path(self, system_id: str, file_name: str) -> Path:
        """Locate a ROM file by exact name anywhere under the ROM dir."""
        path = find_rom_file(self.rom_dir, file_name)
        if path is None:
            raise RomNotFound(f"ROM not found: {system_id}/{file_name}")
        return path

    def read_save(self, system_id: str, rom: str) -> bytes:
        return save_store.read_save(save_store.save_path(self.data_dir, system_id, rom))

    def write_save(self, system_id: str, rom: str, data: bytes) -> None:
        path = save_store.save_path(self.data_dir, system_id, rom)
        save_store.write_save(path, data)

    def cover_statuses(self) -> List[CoverStatus]:
        return covers.audit_covers(self.data_dir, self.scan(), self.registry)

    def cover_path(self, system_id: str, name: str) -> Path:
        # Same identifier rules as save slots: no escaping the covers dir
        save_store.validate_identifier(system_id, "system")
        save_store.validate_identifier(name, "rom")
        path = covers.find_cover(self.data_dir, system_id, name)
        if path is None:
            raise CoverNotFound(f"no cover for {system_id}/{name}")
        return path

    def search(self, query: str) -> List[CatalogEntry]:
        """Entries whose name or file name contains query (case-insensitive)."""
        needle = query.lower()
        catalog = self.scan()
        order = [s.id for s in self.registry] + sorted(k for k in catalog if k not in self.registry)
        matches: List[CatalogEntry] = []
        for system_id in order:
            for entry in sorted(catalog.get(system_id, []), key=lambda e: e.name):
                if needle in entry.name.lower() or needle in entry.file_name.lower():
                    matches.append(entry)
        return matches

    def play_url(self, entry: CatalogEntry, host: str) -> str:
        """Player page URL for an entry, e.g. http://host/player.html?system=nes&rom=..&core=nes."""
        system = self.registry.by_id(entry.system)
        core = system.core if system else ""
        query = urlencode({"system": entry.system, "rom": entry.file_name, "core": core})
        return f"http://{host}/player.html?{query}"
