import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Cookie, Depends, HTTPException, Request, Response
from itsdangerous import BadSignature, URLSafeTimedSerializer

from config import get_settings
from db import DatabaseDep
from models import ROLE_ADMIN, USERS
from schemas import TokenRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

COOKIE_NAME = "access_token"
TOKEN_MAX_AGE = 60 * 60 * 24 * 365


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(get_settings().access_token_secret, salt="access-token")


def _cookie_flags() -> dict:
    if get_settings().is_production:
        return {"httponly": True, "secure": True, "samesite": "none"}
    return {"httponly": True, "secure": False, "samesite": "strict"}


def create_access_token(identity: dict) -> str:
    """
    Sign the identity claims into a token.
    Example data:
        {"email": "someone@example.com"}
    """
    return _serializer().dumps(identity)


def verify_access_token(token: str, max_age_seconds: int = TOKEN_MAX_AGE) -> Optional[dict]:
    """
    Returns the identity dict if valid,
    or None if token is tampered with or expired.
    """
    try:
        return _serializer().loads(token, max_age=max_age_seconds)
    except BadSignature as exc:
        logger.debug("Rejected access token: %s", exc)
        return None


def get_current_identity(
    request: Request,
    access_token: Optional[str] = Cookie(default=None, alias=COOKIE_NAME),
) -> dict:
    """
    Reads the access_token cookie, verifies it and returns the identity.
    Raises 401 if not logged in / invalid.
    """
    if access_token is None:
        raise HTTPException(status_code=401, detail="Unauthorized access")

    data = verify_access_token(access_token)
    if not data or not data.get("email"):
        raise HTTPException(status_code=401, detail="Unauthorized access")

    request.state.user = data
    return data


CurrentUserDep = Annotated[dict, Depends(get_current_identity)]


def require_admin(identity: CurrentUserDep, db: DatabaseDep) -> dict:
    user = db[USERS].find_one({"email": identity["email"]})
    if user is None or user.get("role") != ROLE_ADMIN:
        logger.info("Admin route refused for %s", identity["email"])
        raise HTTPException(status_code=403, detail="Forbidden access")
    return user


AdminDep = Annotated[dict, Depends(require_admin)]


@router.post("/jwt")
def issue_token(payload: TokenRequest, response: Response):
    """
    Sign the posted identity and set it as the auth cookie.
    """
    token = create_access_token(payload.model_dump(mode="json"))
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        max_age=TOKEN_MAX_AGE,
        **_cookie_flags(),
    )
    return {"success": True}


@router.get("/logout")
def logout(response: Response):
    """
    Clear the auth cookie. Safe to call when already logged out.
    """
    response.delete_cookie(COOKIE_NAME, **_cookie_flags())
    return {"success": True}
