"""Data models for systems, catalog entries, and cover status."""
from retrohost.models.catalog import Catalog, CatalogEntry, CoverStatus, SystemSummary
from retrohost.models.system import SystemDescriptor

__all__ = [
    "Catalog",
    "CatalogEntry",
    "CoverStatus",
    "SystemDescriptor",
    "SystemSummary",
]
