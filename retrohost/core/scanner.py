"""Walk the ROM directory and classify each file to a system."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence, Tuple

from retrohost.core.errors import CatalogIOError
from retrohost.core.systems import SystemRegistry
from retrohost.core.tag_store import TagOverlay
from retrohost.models.catalog import Catalog, CatalogEntry
from retrohost.models.system import SystemDescriptor

logger = logging.getLogger(__name__)

# Save files, backups and patches that live next to ROMs
IGNORED_EXTENSIONS = frozenset({".srm", ".sav", ".bak", ".ips", ".ups"})


@dataclass(frozen=True)
class RomCandidate:
    """A file under the ROM root, as seen by the classification rules."""
    rel_parts: Tuple[str, ...]  # path relative to the root, split into segments
    extension: str  # lowercase, with leading dot, "" if none

    @property
    def file_name(self) -> str:
        return self.rel_parts[-1]


ClassificationRule = Callable[[RomCandidate, SystemRegistry], Optional[SystemDescriptor]]


def classify_by_directory(candidate: RomCandidate, registry: SystemRegistry) -> Optional[SystemDescriptor]:
    """File nested anywhere below a top-level directory named after a system id.

    Nesting is decided by segment count, not by comparing names, so a root-level
    file called "nes" or "NES" never counts as being inside the nes directory.
    """
    if len(candidate.rel_parts) < 2:
        return None
    return registry.by_id(candidate.rel_parts[0].lower())


def classify_by_extension(candidate: RomCandidate, registry: SystemRegistry) -> Optional[SystemDescriptor]:
    return registry.by_extension(candidate.extension) if candidate.extension else None


# First rule returning a system wins
CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    classify_by_directory,
    classify_by_extension,
)


def classify(
    candidate: RomCandidate,
    registry: SystemRegistry,
    rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES,
) -> Optional[SystemDescriptor]:
    """Return the system for a candidate, or None if it is not a known ROM."""
    if candidate.extension in IGNORED_EXTENSIONS:
        return None
    for rule in rules:
        system = rule(candidate, registry)
        if system is not None:
            return system
    return None


def display_name(file_name: str) -> str:
    """File name without its final extension ("Pokemon v1.1.gba" -> "Pokemon v1.1")."""
    stem, _ext = os.path.splitext(file_name)
    return stem


def _check_root(rom_dir: Path) -> None:
    if not rom_dir.is_dir():
        raise CatalogIOError(f"ROM directory not found: {rom_dir}")
    try:
        with os.scandir(rom_dir):
            pass
    except OSError as e:
        raise CatalogIOError(f"ROM directory unreadable: {rom_dir}: {e}") from e


def _log_walk_error(err: OSError) -> None:
    logger.debug("Skipping unreadable path %s: %s", err.filename, err)


def iter_rom_files(rom_dir: Path) -> Iterator[Path]:
    """Yield every non-directory file below rom_dir in sorted walk order."""
    for dirpath, dirnames, filenames in os.walk(rom_dir, onerror=_log_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            yield Path(dirpath) / name


def scan_roms(rom_dir: Path, tags: TagOverlay, registry: SystemRegistry) -> Catalog:
    """Scan rom_dir and return system id -> entries.

    Raises CatalogIOError only if rom_dir itself is missing or unreadable;
    problems with individual entries are logged and skipped.
    """
    rom_dir = Path(rom_dir)
    _check_root(rom_dir)
    catalog: Catalog = {}
    for path in iter_rom_files(rom_dir):
        try:
            rel_parts = path.relative_to(rom_dir).parts
        except ValueError as e:
            logger.debug("Skipping %s: %s", path, e)
            continue
        candidate = RomCandidate(rel_parts=rel_parts, extension=path.suffix.lower())
        system = classify(candidate, registry)
        if system is None:
            continue
        file_name = candidate.file_name
        catalog.setdefault(system.id, []).append(
            CatalogEntry(
                name=display_name(file_name),
                file_name=file_name,
                system=system.id,
                tag=tags.get(file_name, ""),
            )
        )
    return catalog


def find_rom_file(rom_dir: Path, file_name: str) -> Optional[Path]:
    """Return the first file anywhere under rom_dir named exactly file_name, or None."""
    if not file_name or file_name in (".", "..") or "/" in file_name or "\\" in file_name:
        return None
    rom_dir = Path(rom_dir)
    if not rom_dir.is_dir():
        return None
    for path in iter_rom_files(rom_dir):
        if path.name == file_name and path.is_file():
            return path
    return None
