"""Save slot download and upload (raw bytes, one slot per system/ROM)."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from retrohost.api.state import AppState, get_state
from retrohost.core.errors import CatalogIOError, InvalidIdentifier, PayloadTooLarge, SaveNotFound
from retrohost.core.save_store import MAX_SAVE_BYTES, check_size, validate_identifier

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{system}/{rom}")
def get_save(system: str, rom: str, state: AppState = Depends(get_state)):
    """Return the save for system/rom as octet-stream."""
    try:
        data = state.library.read_save(system, rom)
    except InvalidIdentifier:
        raise HTTPException(status_code=400, detail="invalid path")
    except SaveNotFound:
        raise HTTPException(status_code=404, detail="no save found")
    except CatalogIOError:
        raise HTTPException(status_code=500, detail="failed to read save")
    return Response(content=data, media_type="application/octet-stream")


async def _read_body(request: Request, limit: int) -> bytes:
    """Read the request body, stopping as soon as it exceeds limit."""
    declared = request.headers.get("content-length")
    if declared and declared.isdigit():
        check_size(int(declared), limit)
    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        check_size(size, limit)
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/{system}/{rom}")
async def post_save(system: str, rom: str, request: Request, state: AppState = Depends(get_state)):
    """Store the raw request body as the save for system/rom."""
    try:
        validate_identifier(system, "system")
        validate_identifier(rom, "rom")
        body = await _read_body(request, MAX_SAVE_BYTES)
        await run_in_threadpool(state.library.write_save, system, rom, body)
    except InvalidIdentifier:
        raise HTTPException(status_code=400, detail="invalid path")
    except PayloadTooLarge as e:
        raise HTTPException(status_code=413, detail=str(e))
    except CatalogIOError as e:
        logger.warning("Save upload failed for %s/%s: %s", system, rom, e)
        raise HTTPException(status_code=500, detail="failed to write save")
    return {"status": "ok"}
