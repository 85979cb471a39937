"""Template loading and page rendering."""

import logging
from pathlib import Path

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, select_autoescape

from plainwiki.core.models import Page

logger = logging.getLogger(__name__)

TEMPLATE_NAMES = ("view", "edit")


def load_templates(directory: Path) -> Jinja2Templates:
    """Compile the page templates found in ``directory``.

    Every template in TEMPLATE_NAMES is compiled up front so that a missing
    or broken template fails here, before any request is served. The
    environment never reloads from disk afterwards.

    Raises:
        jinja2.TemplateError: if a template is missing or does not parse.
    """
    env = Environment(
        loader=FileSystemLoader(str(directory)),
        autoescape=select_autoescape(),
        auto_reload=False,
    )
    templates = Jinja2Templates(env=env)
    for name in TEMPLATE_NAMES:
        templates.get_template(f"{name}.html")
    logger.info("Loaded templates from %s", directory)
    return templates


class PageRenderer:
    """Renders a Page through one of the preloaded templates."""

    def __init__(self, templates: Jinja2Templates):
        self.templates = templates

    def render(self, request: Request, name: str, page: Page) -> Response:
        try:
            return self.templates.TemplateResponse(
                request, f"{name}.html", {"page": page}
            )
        except Exception as exc:
            logger.exception("Rendering %s for %r failed", name, page.title)
            return PlainTextResponse(str(exc), status_code=500)
