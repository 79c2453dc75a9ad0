"""Identity middleware: attaches the upstream-verified user id to the request."""
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from career_insights.config import get_settings
from career_insights.utils.logger import log


class IdentityMiddleware(BaseHTTPMiddleware):
    """
    Copies the identity provider's verified user id from a trusted header
    into request.state.user_id. Requests without the header pass through
    with user_id = None; services decide whether that is an error.
    """

    def __init__(self, app, header_name: Optional[str] = None):
        super().__init__(app)
        self.header_name = header_name or get_settings().identity_header

    async def dispatch(self, request: Request, call_next):
        user_id = request.headers.get(self.header_name)
        request.state.user_id = user_id.strip() if user_id and user_id.strip() else None
        with log.contextualize(user=request.state.user_id or "-"):
            return await call_next(request)
