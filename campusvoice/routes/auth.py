import logging

from fastapi import APIRouter, Depends, Request, Response

from campusvoice.core.errors import IdentityServiceError, ValidationError
from campusvoice.models.user import AuthUser
from campusvoice.schemas.auth import SessionCreate
from campusvoice.services.identity import IdentityProvider, get_identity_provider
from campusvoice.utils.security import (
    admin_required,
    clear_session_cookie,
    get_session_token,
    set_session_cookie,
)

router = APIRouter(tags=["Auth"])
logger = logging.getLogger(__name__)


@router.get("/oauth/google/redirect_url")
def oauth_redirect_url(identity: IdentityProvider = Depends(get_identity_provider)):
    return {"redirectUrl": identity.get_oauth_redirect_url("google")}


@router.post("/sessions")
def create_session(
    payload: SessionCreate,
    response: Response,
    identity: IdentityProvider = Depends(get_identity_provider),
):
    if not payload.code:
        raise ValidationError("No authorization code provided")

    session_token = identity.exchange_code(payload.code)
    set_session_cookie(response, session_token)
    logger.info("Admin session created")
    return {"success": True}


@router.get("/users/me")
def current_user(user: AuthUser = Depends(admin_required)):
    return user.model_dump()


@router.get("/logout")
def logout(
    request: Request,
    response: Response,
    identity: IdentityProvider = Depends(get_identity_provider),
):
    session_token = get_session_token(request)
    if session_token is not None:
        try:
            identity.delete_session(session_token)
        except IdentityServiceError as e:
            # The cookie is cleared regardless; the provider session expires on its own
            logger.warning("Could not delete session on logout: %s", e.detail or e.message)

    clear_session_cookie(response)
    return {"success": True}
