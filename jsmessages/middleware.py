"""Accept-Language detection middleware."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from jsmessages.i18n import MessageSource


class LanguageMiddleware(BaseHTTPMiddleware):
    """Parse ``Accept-Language`` and expose ``request.state.language``.

    Only languages with a bundle in the message source are considered.  The
    resolved language is echoed back via the ``Content-Language`` header.
    """

    def __init__(self, app: ASGIApp, source: MessageSource) -> None:
        super().__init__(app)
        self.source = source

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        language = self.source.preferred(request.headers.get("Accept-Language"))
        request.state.language = language

        response = await call_next(request)
        response.headers.setdefault("Content-Language", language)
        return response
