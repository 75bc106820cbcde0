# bakery/core/auth.py
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlmodel import Session

from bakery.core.config import get_settings
from bakery.database import get_session
from bakery.models.admin_user import AdminUser
from bakery.repositories.admin_repo import AdminUserRepository

settings = get_settings()

# auto_error=False so a missing header yields our own 401 message.
bearer_scheme = HTTPBearer(auto_error=False)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

admin_repo = AdminUserRepository()

STAFF_ROLES = {"admin", "manager"}


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_access_token(admin: AdminUser) -> str:
    """
    Issue a signed JWT for a back-office account.

    Claims:
      - sub: admin id (string)
      - username, role: informational only, re-read from DB on each request
      - exp: now + JWT_EXPIRES_MINUTES
    """
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(admin.id),
        "username": admin.username,
        "role": admin.role,
        "iat": now,
        "exp": now + timedelta(minutes=settings.JWT_EXPIRES_MINUTES),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an admin access token (signature + expiry).

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> AdminUser:
    """
    Resolve the authenticated back-office account from the bearer token.

    Flow:
      1. No Authorization header => 401.
      2. Decode JWT => extract 'sub' (admin id).
      3. Load the account; it must still exist and be active.

    Raises:
        HTTPException(401): on any failure above.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    payload = decode_access_token(credentials.credentials)

    try:
        admin_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    admin = admin_repo.get_active(session, admin_id)
    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin user does not exist",
        )
    return admin


def require_admin(admin: AdminUser = Depends(get_current_admin)) -> AdminUser:
    """
    Enforce role == "admin" (account management).

    Raises:
        HTTPException(403): for any other role.
    """
    if admin.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return admin


def require_staff(admin: AdminUser = Depends(get_current_admin)) -> AdminUser:
    """
    Enforce role in {"admin", "manager"}.

    Use this for catalog and order management endpoints.
    """
    if admin.role not in STAFF_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Staff access required",
        )
    return admin
