"""Error types raised by the catalog engine and save store."""


class RetroHostError(Exception):
    """Base class for catalog, ROM and save errors."""


class NotFound(RetroHostError):
    """Requested resource does not exist."""


class RomNotFound(NotFound):
    pass


class SaveNotFound(NotFound):
    pass


class CoverNotFound(NotFound):
    pass


class InvalidIdentifier(RetroHostError, ValueError):
    """System id or ROM name that could escape its directory."""


class PayloadTooLarge(RetroHostError):
    """Save upload exceeds the size cap."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"payload of {size} bytes exceeds limit of {limit} bytes")
        self.size = size
        self.limit = limit


class CatalogIOError(RetroHostError, OSError):
    """Filesystem failure that must reach the caller (ROM root, save writes)."""


class SaveIOError(CatalogIOError):
    pass


class MalformedConfig(RetroHostError):
    """Unparseable tags file. Recovered inside the loader, never propagated."""
