import logging

import uvicorn
from fastapi import FastAPI

from cynthia.config import Settings, settings
from cynthia.exception_handlers import register_exception_handlers
from cynthia.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from cynthia.routes import pages
from cynthia.services.site import Site

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings | None = None, site: Site | None = None) -> FastAPI:
    """Create the FastAPI application serving one Cynthia site."""
    app_settings = app_settings or settings
    app = FastAPI(
        title=app_settings.app_name,
        description="Cynthia page server",
        debug=app_settings.debug,
        version=app_settings.app_version,
    )

    app.state.site = site or Site(app_settings)

    app.add_middleware(StructuredLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(pages.router)

    if app_settings.debug:
        logger.info("Running in %s mode", app_settings.environment)

    return app


def main() -> None:
    setup_structured_logging(
        log_level=settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
    )
    logger.info("Serving %s from %s", settings.app_name, settings.site_root.resolve())
    uvicorn.run(create_app(), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
