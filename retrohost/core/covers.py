"""Cover art lookup: <data_dir>/covers/<system>/<rom name>.<png|jpg|webp>."""
from pathlib import Path
from typing import List, Optional

from retrohost.core.systems import SystemRegistry
from retrohost.models.catalog import Catalog, CoverStatus

COVERS_DIRNAME = "covers"
# Checked in this order; first hit wins
COVER_EXTENSIONS = ("png", "jpg", "webp")


def covers_dir(data_dir: Path) -> Path:
    return Path(data_dir) / COVERS_DIRNAME


def find_cover(data_dir: Path, system_id: str, name: str) -> Optional[Path]:
    """Return the cover image for a ROM display name, or None."""
    base = covers_dir(data_dir) / system_id
    for ext in COVER_EXTENSIONS:
        candidate = base / f"{name}.{ext}"
        if candidate.is_file():
            return candidate
    return None


def audit_covers(data_dir: Path, catalog: Catalog, registry: SystemRegistry) -> List[CoverStatus]:
    """One CoverStatus per catalog entry, systems in registry order."""
    system_ids = [s.id for s in registry if s.id in catalog]
    # Systems the registry does not know about go last
    system_ids += sorted(k for k in catalog if k not in registry)

    statuses: List[CoverStatus] = []
    for system_id in system_ids:
        for entry in catalog[system_id]:
            cover = find_cover(data_dir, system_id, entry.name)
            statuses.append(CoverStatus(entry=entry, has_cover=cover is not None, cover_path=cover))
    return statuses
