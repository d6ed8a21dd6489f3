"""Configuration: env, ROM/data directories, server address, static asset dirs."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Base paths (project root = parent of retrohost package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so ROM_DIR etc. can be set there
load_dotenv(BASE_DIR / ".env")

ROM_DIR = Path(os.getenv("ROM_DIR") or "/roms")
DATA_DIR = Path(os.getenv("DATA_DIR") or "/data")

# API
API_HOST = os.getenv("RETROHOST_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("PORT") or "8080")
# External address used in play URLs (defaults to localhost:PORT)
HOST_ADDR = os.getenv("HOST_ADDR", "")

LOG_LEVEL = os.getenv("RETROHOST_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def find_dir(name: str, *candidates: Path) -> Path:
    """Return the first existing directory among candidates, else the first candidate."""
    for candidate in candidates:
        if candidate.is_dir():
            return candidate
    logger.warning(
        "%s directory not found at %s", name, " or ".join(str(c) for c in candidates)
    )
    return candidates[0]


def _static_dir(env_var: str, name: str) -> Path:
    override = os.getenv(env_var)
    if override:
        return Path(override)
    return find_dir(name, Path.cwd() / name, BASE_DIR / name, Path("/app") / name)


@dataclass
class Settings:
    """Snapshot of runtime configuration."""
    rom_dir: Path
    data_dir: Path
    port: int = API_PORT
    host_addr: str = HOST_ADDR
    api_host: str = API_HOST
    frontend_dir: Path | None = None
    emulatorjs_dir: Path | None = None

    @property
    def public_host(self) -> str:
        return self.host_addr or f"localhost:{self.port}"


def load_settings(
    rom_dir: Path | None = None,
    data_dir: Path | None = None,
    *,
    with_static: bool = False,
) -> Settings:
    """Build Settings from the environment; explicit arguments win."""
    settings = Settings(
        rom_dir=Path(rom_dir) if rom_dir is not None else ROM_DIR,
        data_dir=Path(data_dir) if data_dir is not None else DATA_DIR,
    )
    if with_static:
        settings.frontend_dir = _static_dir("FRONTEND_DIR", "frontend")
        settings.emulatorjs_dir = _static_dir("EMULATORJS_DIR", "emulatorjs")
    return settings


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
