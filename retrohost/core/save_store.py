"""Per-game save slots: <data_dir>/saves/<system>/<rom>.sav.

Writes replace the whole file atomically. Two writers on the same slot are
not serialized; the last one to finish wins.
"""
import logging
import os
import tempfile
from pathlib import Path

from retrohost.core.errors import InvalidIdentifier, PayloadTooLarge, SaveIOError, SaveNotFound

logger = logging.getLogger(__name__)

SAVES_DIRNAME = "saves"
SAVE_SUFFIX = ".sav"
MAX_SAVE_BYTES = 10 * 1024 * 1024

_FORBIDDEN = ("..", "/", "\\", "\x00")


def validate_identifier(value: str, what: str = "identifier") -> str:
    """Return value unchanged, or raise InvalidIdentifier if it could leave its directory."""
    if not isinstance(value, str) or not value or value in (".", ".."):
        raise InvalidIdentifier(f"invalid {what}: {value!r}")
    separators = _FORBIDDEN + tuple(s for s in (os.sep, os.altsep) if s)
    if any(s in value for s in separators):
        raise InvalidIdentifier(f"invalid {what}: {value!r}")
    return value


def save_path(data_dir: Path, system_id: str, rom: str) -> Path:
    """Path of the save slot for (system_id, rom). Validates both; no I/O."""
    validate_identifier(system_id, "system")
    validate_identifier(rom, "rom")
    return Path(data_dir) / SAVES_DIRNAME / system_id / f"{rom}{SAVE_SUFFIX}"


def read_save(path: Path) -> bytes:
    """Return slot contents; SaveNotFound if there is none."""
    try:
        return Path(path).read_bytes()
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
        raise SaveNotFound(f"no save found: {path}") from e
    except OSError as e:
        raise SaveIOError(f"failed to read save {path}: {e}") from e


def check_size(size: int, limit: int = MAX_SAVE_BYTES) -> None:
    if size > limit:
        raise PayloadTooLarge(size, limit)


def write_save(path: Path, data: bytes, limit: int = MAX_SAVE_BYTES) -> None:
    """Replace slot contents with data, creating parent directories."""
    check_size(len(data), limit)
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as e:
        raise SaveIOError(f"failed to prepare save {path}: {e}") from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise SaveIOError(f"failed to write save {path}: {e}") from e
    logger.info("Wrote save %s (%d bytes)", path, len(data))
