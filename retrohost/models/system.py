"""Supported platform description."""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SystemDescriptor:
    """One emulation target: id doubles as the name of its ROM directory."""
    id: str
    name: str
    core: str  # emulator core hint, passed through to the player
    extensions: Tuple[str, ...]  # lowercase, with leading dot
