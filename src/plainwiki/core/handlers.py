"""Route handlers for viewing, editing and saving pages."""

import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from plainwiki.core.models import Page
from plainwiki.core.pipeline import RequestContext
from plainwiki.core.rendering import PageRenderer
from plainwiki.core.storage import Storage

logger = logging.getLogger(__name__)


class PageHandlers:
    """The view, edit and save handlers.

    Each expects ``context.title`` to have been validated already.
    """

    def __init__(self, storage: Storage, renderer: PageRenderer):
        self.storage = storage
        self.renderer = renderer

    async def view(self, request: Request, context: RequestContext) -> Response:
        """View a page, or go create it if it doesn't exist."""
        title = context.title
        page = await self.storage.get_page(title)
        if page is None:
            return RedirectResponse(url=f"/edit/{title}", status_code=302)
        return self.renderer.render(request, "view", page)

    async def edit(self, request: Request, context: RequestContext) -> Response:
        """Edit page form."""
        title = context.title
        page = await self.storage.get_page(title)
        if page is None:
            # New page
            page = Page(title=title)
        return self.renderer.render(request, "edit", page)

    async def save(self, request: Request, context: RequestContext) -> Response:
        """Save the submitted body and redirect to the page."""
        title = context.title
        form = await request.form()
        body = form.get("body", "")
        # multipart forms may send the field as a file
        data = body.encode("utf-8") if isinstance(body, str) else await body.read()

        try:
            await self.storage.save_page(title, data)
        except OSError as exc:
            logger.error("Saving page %r failed: %s", title, exc)
            return PlainTextResponse(str(exc), status_code=500)

        return RedirectResponse(url=f"/view/{title}", status_code=302)
