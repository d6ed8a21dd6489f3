"""Load the filename -> tag overlay (tags.json in the data dir)."""
import json
import logging
from pathlib import Path
from typing import Dict

from retrohost.core.errors import MalformedConfig

logger = logging.getLogger(__name__)

TAGS_FILENAME = "tags.json"

# Exact on-disk filename (with extension) -> free-text tag
TagOverlay = Dict[str, str]


def tags_path(data_dir: Path) -> Path:
    return Path(data_dir) / TAGS_FILENAME


def _parse_tags(text: str) -> TagOverlay:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedConfig(f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedConfig(f"expected a JSON object, got {type(data).__name__}")
    tags: TagOverlay = {}
    for file_name, tag in data.items():
        if not isinstance(tag, str):
            raise MalformedConfig(f"tag for {file_name!r} is not a string")
        tags[file_name] = tag
    return tags


def load_tags(data_dir: Path) -> TagOverlay:
    """Load tags from disk. Missing file gives {}; a broken one gives {} and a warning."""
    p = tags_path(data_dir)
    if not p.exists():
        return {}
    try:
        return _parse_tags(p.read_text(encoding="utf-8"))
    except (MalformedConfig, OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to parse %s: %s", p, e)
        return {}
