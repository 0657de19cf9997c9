"""Anonymous session id cookie handling."""

from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from movie_finder.domain.errors import MissingSessionError

COOKIE_NAME = "mf.sid"
COOKIE_MAX_AGE_SECONDS = 7 * 24 * 60 * 60


class SessionIdMiddleware(BaseHTTPMiddleware):
    """Guarantee every request carries an anonymous session id.

    The id is read from the session cookie or freshly generated, in which case
    the cookie is set on the response. Handlers read it from
    ``request.state.session_id`` via :func:`current_session_id`.
    """

    def __init__(
        self,
        app: ASGIApp,
        cookie_name: str = COOKIE_NAME,
        max_age_seconds: int = COOKIE_MAX_AGE_SECONDS,
    ) -> None:
        super().__init__(app)
        self.cookie_name = cookie_name
        self.max_age_seconds = max_age_seconds

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        session_id = request.cookies.get(self.cookie_name)
        issued = False
        if not session_id or not session_id.strip():
            session_id = str(uuid4())
            issued = True

        request.state.session_id = session_id
        response = await call_next(request)
        if issued:
            response.set_cookie(
                self.cookie_name,
                session_id,
                max_age=self.max_age_seconds,
                path="/",
                httponly=True,
                samesite="lax",
                secure=request.url.scheme == "https",
            )
        return response


def current_session_id(request: Request) -> str:
    """Return the session id attached by :class:`SessionIdMiddleware`."""
    session_id = getattr(request.state, "session_id", None)
    if not session_id:
        raise MissingSessionError(
            "Session id is missing; ensure SessionIdMiddleware is installed"
        )
    return session_id
