"""Catalog entries and derived per-entry state."""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional


@dataclass
class CatalogEntry:
    """One playable ROM found during a scan."""
    name: str  # file name without extension
    file_name: str
    system: str
    tag: str = ""


# system id -> entries in walk order
Catalog = Dict[str, List[CatalogEntry]]


@dataclass
class CoverStatus:
    """Whether a cover image exists for an entry."""
    entry: CatalogEntry
    has_cover: bool
    cover_path: Optional[Path] = None


@dataclass
class SystemSummary:
    """A system with at least one cataloged ROM."""
    id: str
    name: str
    core: str
    rom_count: int
