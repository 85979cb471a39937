"""plainwiki FastAPI application."""

import logging
import sys

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse
from jinja2 import TemplateError
from starlette.exceptions import HTTPException as StarletteHTTPException

from plainwiki.config import Settings, settings
from plainwiki.core.handlers import PageHandlers
from plainwiki.core.pipeline import Pipeline, TitleValidationStage, not_found
from plainwiki.core.rendering import PageRenderer, load_templates
from plainwiki.core.storage import FileStorage, Storage
from plainwiki.core.validation import TitleValidator
from plainwiki.middleware import AccessLogMiddleware

logger = logging.getLogger(__name__)


def create_app(
    config: Settings | None = None, storage: Storage | None = None
) -> FastAPI:
    """Build the application.

    Usable as a uvicorn factory: ``uvicorn plainwiki.main:create_app --factory``.

    Templates are compiled here, so a missing or broken template raises
    jinja2.TemplateError before the app can serve anything.
    """
    if config is None:
        config = settings
    templates = load_templates(config.templates_dir)
    if storage is None:
        storage = FileStorage(config.data_dir)

    handlers = PageHandlers(storage, PageRenderer(templates))
    pipeline = Pipeline([TitleValidationStage(TitleValidator())])

    app = FastAPI(title="plainwiki", debug=config.debug)
    app.add_middleware(AccessLogMiddleware)

    @app.exception_handler(StarletteHTTPException)
    async def unknown_route(request: Request, exc: StarletteHTTPException):
        # rejected titles and unmatched paths must look the same
        if exc.status_code == 404:
            return not_found()
        return await http_exception_handler(request, exc)

    app.add_api_route(
        "/view/{title}",
        pipeline.endpoint(handlers.view),
        methods=["GET"],
        response_class=HTMLResponse,
    )
    app.add_api_route(
        "/edit/{title}",
        pipeline.endpoint(handlers.edit),
        methods=["GET"],
        response_class=HTMLResponse,
    )
    app.add_api_route(
        "/save/{title}",
        pipeline.endpoint(handlers.save),
        methods=["POST"],
    )
    return app


def configure_logging(level: str) -> None:
    """Send log records to stderr."""
    logging.basicConfig(
        stream=sys.stderr,
        level=level.upper(),
        format="[wiki] %(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run() -> None:
    """Console entry point: start the server on the configured port."""
    configure_logging(settings.log_level)
    try:
        application = create_app(settings)
    except TemplateError:
        logger.exception("Failed to load templates from %s", settings.templates_dir)
        sys.exit(1)

    logger.info("Visit http://localhost:%d/view/hello", settings.port)
    # uvicorn logs a bind failure and exits with status 1 itself
    uvicorn.run(
        application,
        host=settings.host,
        port=settings.port,
        access_log=False,
        log_config=None,
    )


if __name__ == "__main__":
    run()
