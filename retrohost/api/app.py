"""FastAPI app, CORS, route registration, and static frontend."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from retrohost.api.state import AppState, get_state
from retrohost.config import configure_logging

# Import routes after state to avoid circular imports
from retrohost.api.routes import covers, roms, saves, systems

__all__ = ["app", "create_app", "AppState", "get_state"]

logger = logging.getLogger(__name__)


def _mount_frontend(app: FastAPI, frontend_dir: Path) -> None:
    """Serve index.html, player.html, css/ and js/; anything else falls back to index."""
    index = frontend_dir / "index.html"
    for sub in ("css", "js"):
        if (frontend_dir / sub).is_dir():
            app.mount(f"/{sub}", StaticFiles(directory=frontend_dir / sub), name=sub)

    @app.get("/player.html", include_in_schema=False)
    def player_page():
        return FileResponse(frontend_dir / "player.html")

    @app.get("/{path:path}", include_in_schema=False)
    def index_page(path: str):
        if not index.is_file():
            return PlainTextResponse("frontend not found", status_code=404)
        return FileResponse(index)


def create_app(state: AppState | None = None) -> FastAPI:
    """Build the app. With state given, routes use it instead of the env-configured one."""
    resolved = state if state is not None else get_state()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("ROM directory: %s", resolved.settings.rom_dir)
        logger.info("Data directory: %s", resolved.settings.data_dir)
        yield

    app = FastAPI(
        title="RetroHost API",
        description="Self-hosted retro game catalog, ROM and save server",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if state is not None:
        app.dependency_overrides[get_state] = lambda: state

    app.include_router(systems.router, prefix="/api/systems", tags=["systems"])
    app.include_router(roms.router, prefix="/api/roms", tags=["roms"])
    app.include_router(covers.router, prefix="/api/covers", tags=["covers"])
    app.include_router(saves.router, prefix="/api/saves", tags=["saves"])
    app.include_router(roms.files_router, prefix="/roms", tags=["roms"])
    app.include_router(covers.files_router, prefix="/covers", tags=["covers"])

    settings = resolved.settings
    if settings.emulatorjs_dir is not None and settings.emulatorjs_dir.is_dir():
        app.mount("/emulatorjs", StaticFiles(directory=settings.emulatorjs_dir), name="emulatorjs")
    if settings.frontend_dir is not None and settings.frontend_dir.is_dir():
        _mount_frontend(app, settings.frontend_dir)
    return app


def _build_default_app() -> FastAPI:
    configure_logging()
    return create_app()


app = _build_default_app()
