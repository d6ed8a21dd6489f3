"""ROM listing per system and raw ROM file download."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel, ConfigDict, Field

from retrohost.api.state import AppState, get_state
from retrohost.core.errors import CatalogIOError, RomNotFound

router = APIRouter()
files_router = APIRouter()


class RomOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    file_name: str = Field(alias="fileName")
    system: str
    tag: str = ""


@router.get("", response_model=List[RomOut])
def list_roms(system: Optional[str] = None, state: AppState = Depends(get_state)):
    """List ROMs for ?system=<id>; unknown systems give an empty list."""
    if not system:
        raise HTTPException(status_code=400, detail="system parameter required")
    try:
        entries = state.library.list_roms(system)
    except CatalogIOError:
        raise HTTPException(status_code=500, detail="failed to scan ROMs")
    return [
        RomOut(name=e.name, file_name=e.file_name, system=e.system, tag=e.tag)
        for e in entries
    ]


@files_router.get("/{system}/{file_name}")
def get_rom_file(system: str, file_name: str, state: AppState = Depends(get_state)):
    """Serve a ROM by exact file name; it may live anywhere under the ROM dir."""
    try:
        path = state.library.rom_path(system, file_name)
    except RomNotFound:
        raise HTTPException(status_code=404, detail="ROM not found")
    return FileResponse(path, filename=path.name, media_type="application/octet-stream")
