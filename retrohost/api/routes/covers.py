"""Cover-art status and cover image download."""
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel, ConfigDict, Field

from retrohost.api.state import AppState, get_state
from retrohost.core.errors import CatalogIOError, CoverNotFound, InvalidIdentifier

router = APIRouter()
files_router = APIRouter()


class CoverOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    system: str
    name: str
    file_name: str = Field(alias="fileName")
    has_cover: bool = Field(alias="hasCover")
    cover_url: Optional[str] = Field(default=None, alias="coverUrl")


class CoverReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    with_cover: int = Field(alias="withCover")
    missing: int
    covers: List[CoverOut]


def _cover_url(status) -> Optional[str]:
    """URL of the served cover image, None when the ROM has no cover."""
    if status.cover_path is None:
        return None
    return f"/covers/{quote(status.entry.system, safe='')}/{quote(status.entry.name, safe='')}"


@router.get("", response_model=CoverReport)
def get_cover_report(state: AppState = Depends(get_state)):
    """Cover status for every cataloged ROM."""
    try:
        statuses = state.library.cover_statuses()
    except CatalogIOError:
        raise HTTPException(status_code=500, detail="failed to scan ROMs")
    found = sum(1 for s in statuses if s.has_cover)
    return CoverReport(
        total=len(statuses),
        with_cover=found,
        missing=len(statuses) - found,
        covers=[
            CoverOut(
                system=s.entry.system,
                name=s.entry.name,
                file_name=s.entry.file_name,
                has_cover=s.has_cover,
                cover_url=_cover_url(s),
            )
            for s in statuses
        ],
    )


@files_router.get("/{system}/{name}")
def get_cover_image(system: str, name: str, state: AppState = Depends(get_state)):
    """Serve the cover image for a ROM display name."""
    try:
        path = state.library.cover_path(system, name)
    except InvalidIdentifier:
        raise HTTPException(status_code=400, detail="invalid path")
    except CoverNotFound:
        raise HTTPException(status_code=404, detail="no cover found")
    return FileResponse(path)
