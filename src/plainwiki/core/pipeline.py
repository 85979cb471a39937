"""Per-request processing pipeline.

A pipeline is an ordered list of stages that run before a route handler.
Each stage gets the request and the request's context. Returning ``None``
lets the next stage run; returning a response ends the request with that
response and the handler is never called.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response

from plainwiki.core.validation import TitleValidator

logger = logging.getLogger(__name__)


def not_found() -> Response:
    """The response for both unknown routes and rejected titles."""
    return PlainTextResponse("404 page not found", status_code=404)


@dataclass
class RequestContext:
    """Values established by the pipeline for a single request."""

    title: str = ""


Stage = Callable[[Request, RequestContext], Awaitable[Response | None]]
Handler = Callable[[Request, RequestContext], Awaitable[Response]]


class Pipeline:
    """Runs stages in order, then the handler."""

    def __init__(self, stages: Sequence[Stage]):
        self.stages = tuple(stages)

    async def run(self, request: Request, handler: Handler) -> Response:
        context = RequestContext()
        for stage in self.stages:
            response = await stage(request, context)
            if response is not None:
                return response
        return await handler(request, context)

    def endpoint(self, handler: Handler) -> Callable[[Request], Awaitable[Response]]:
        """Build a route endpoint that sends every request through the pipeline."""

        async def endpoint(request: Request) -> Response:
            return await self.run(request, handler)

        endpoint.__name__ = handler.__name__
        return endpoint


class TitleValidationStage:
    """Admits only requests whose ``title`` path parameter is valid.

    Invalid titles get the same 404 as a missing route, so the response
    does not reveal why the request was rejected.
    """

    def __init__(self, validator: TitleValidator):
        self.validator = validator

    async def __call__(
        self, request: Request, context: RequestContext
    ) -> Response | None:
        title = request.path_params.get("title", "")
        if not self.validator.is_valid(title):
            logger.error(
                "%s %s: Invalid Page Title", request.method, request.url.path
            )
            return not_found()
        context.title = title
        return None
