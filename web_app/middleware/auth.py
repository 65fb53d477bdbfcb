"""Owner identification middleware."""

import re
import secrets
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

COOKIE_NAME = "Authorization-Token"
COOKIE_MAX_AGE = 24 * 60 * 60

_OWNER_ID = re.compile(r"^[0-9A-Za-z_-]{1,64}$")


def generate_owner_id() -> str:
    return secrets.token_hex(16)


class OwnerCookieMiddleware(BaseHTTPMiddleware):
    """Attach an opaque owner id to every request.

    The id is read from the auth cookie; a missing or malformed cookie gets a
    freshly generated id. The id is written back on every response.

    The cookie is neither signed nor encrypted: a client that sends another
    owner's id acts as that owner. It identifies callers, it does not
    authenticate them.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        """Resolve the owner id, then refresh the cookie on the response."""
        owner_id = request.cookies.get(COOKIE_NAME, "")
        if not _OWNER_ID.match(owner_id):
            owner_id = generate_owner_id()

        request.state.owner_id = owner_id

        response = await call_next(request)
        response.set_cookie(
            COOKIE_NAME,
            owner_id,
            max_age=COOKIE_MAX_AGE,
            httponly=True,
        )
        return response
