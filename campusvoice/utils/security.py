from typing import Optional

from fastapi import Depends, Request, Response

from campusvoice.core.config import SESSION_COOKIE_NAME, SESSION_MAX_AGE
from campusvoice.core.errors import Unauthorized
from campusvoice.models.user import AuthUser
from campusvoice.services.identity import IdentityProvider, get_identity_provider


def get_session_token(request: Request) -> Optional[str]:
    token = request.cookies.get(SESSION_COOKIE_NAME)
    return token or None


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        max_age=SESSION_MAX_AGE,
        path="/",
        httponly=True,
        secure=True,
        samesite="none",
    )


def clear_session_cookie(response: Response) -> None:
    response.set_cookie(
        SESSION_COOKIE_NAME,
        "",
        max_age=0,
        path="/",
        httponly=True,
        secure=True,
        samesite="none",
    )


def admin_required(
    request: Request,
    identity: IdentityProvider = Depends(get_identity_provider),
) -> AuthUser:
    token = get_session_token(request)
    if token is None:
        raise Unauthorized("Not authenticated")

    user = identity.current_user(token)
    if user is None:
        raise Unauthorized("Session expired or invalid")
    return user
