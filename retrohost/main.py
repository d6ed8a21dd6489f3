"""Entry: start the API server."""
import logging

import uvicorn

from retrohost.config import Settings, configure_logging, load_settings

logger = logging.getLogger(__name__)


def serve(settings: Settings | None = None) -> None:
    """Run the API and frontend with uvicorn until interrupted."""
    from retrohost.api.app import create_app
    from retrohost.api.state import AppState

    if settings is None:
        settings = load_settings(with_static=True)
    logger.info("RetroHost starting on %s:%d", settings.api_host, settings.port)
    uvicorn.run(create_app(AppState(settings)), host=settings.api_host, port=settings.port)


if __name__ == "__main__":
    configure_logging()
    serve()
