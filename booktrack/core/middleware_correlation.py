from typing_extensions import override
import re
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
from starlette.requests import Request
from starlette.responses import Response
from typing import Callable, Final
from collections.abc import Awaitable

_REQUEST_ID_RE: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9._-]{1,128}")


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id for log correlation.
    - Reuses the caller's header when it looks like an id
    - Otherwise generates a uuid4
    - Sets `request.state.correlation_id` and echoes the header back
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name: str = header_name

    @override
    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        incoming = request.headers.get(self.header_name, "")
        corr_id = incoming if _REQUEST_ID_RE.fullmatch(incoming) else str(uuid.uuid4())
        request.state.correlation_id = corr_id
        response = await call_next(request)
        response.headers[self.header_name] = corr_id
        return response
