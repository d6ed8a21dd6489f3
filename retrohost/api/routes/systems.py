"""System listing: only systems with at least one ROM."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from retrohost.api.state import AppState, get_state
from retrohost.core.errors import CatalogIOError

router = APIRouter()


class SystemOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    core: str
    rom_count: int = Field(alias="romCount")


@router.get("", response_model=List[SystemOut])
def list_systems(state: AppState = Depends(get_state)):
    """Return systems that have ROMs, with counts."""
    try:
        summaries = state.library.list_systems()
    except CatalogIOError:
        raise HTTPException(status_code=500, detail="failed to scan ROMs")
    return [
        SystemOut(id=s.id, name=s.name, core=s.core, rom_count=s.rom_count)
        for s in summaries
    ]
