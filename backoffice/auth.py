"""
Single-administrator session auth.

Credentials come from settings (ADMIN_USERNAME / ADMIN_PASSWORD). A
successful login issues an HS256 JWT stored in an HTTP-only cookie; admin
routes depend on `require_admin` to validate it.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status
from jose import JWTError, jwt

from backoffice.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminUser:
    username: str
    name: str


def verify_credentials(settings: Settings, username: str, password: str) -> bool:
    """Verify login credentials against the configured values."""
    if not settings.admin_password:
        return False

    user_ok = hmac.compare_digest(
        (username or "").lower().encode("utf-8"),
        settings.admin_username.lower().encode("utf-8"),
    )
    pass_ok = hmac.compare_digest(
        (password or "").encode("utf-8"), settings.admin_password.encode("utf-8")
    )
    return user_ok and pass_ok


def create_session_token(settings: Settings, user: AdminUser) -> str:
    expire = datetime.now(timezone.utc) + timedelta(
        hours=settings.session_max_age_hours
    )
    claims = {"sub": user.username, "name": user.name, "exp": expire}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_session_token(settings: Settings, token: str) -> Optional[AdminUser]:
    """Return the session user, or None if the token is invalid or expired."""
    if not token:
        return None
    try:
        payload = jwt.decode(
            token, settings.secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as exc:
        logger.info("Rejected session token: %s", exc)
        return None
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        return None
    return AdminUser(username=subject, name=payload.get("name") or subject)


def set_session_cookie(response: Response, settings: Settings, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_hours * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def get_current_admin(
    request: Request, settings: Settings = Depends(get_settings)
) -> Optional[AdminUser]:
    token = request.cookies.get(settings.session_cookie_name, "")
    return decode_session_token(settings, token)


def require_admin(
    user: Optional[AdminUser] = Depends(get_current_admin),
) -> AdminUser:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user
