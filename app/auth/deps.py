# app/auth/deps.py
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from app.auth.jwt import decode_subject
from app.core.config import settings
from app.core.errors import NotAuthenticated

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_user_id(request: Request, bearer: str | None = Depends(oauth2_scheme)) -> int:
    """Authenticated user id from the auth cookie, or from a Bearer header."""
    token = request.cookies.get(settings.AUTH_COOKIE_NAME) or bearer
    if not token:
        raise NotAuthenticated("no token provided")
    sub = decode_subject(token)
    if sub is None or not str(sub).isdigit():
        raise NotAuthenticated("invalid token")
    return int(sub)
