"""Verification of the auth provider's session tokens."""
from __future__ import annotations

from typing import Any, Dict

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings

AUTH_SCHEME = HTTPBearer(auto_error=False)


def decode_token(token: str) -> Dict[str, Any]:
    options = {"require": ["sub", "exp"]}
    return jwt.decode(
        token,
        settings.auth_jwt_key.get_secret_value(),
        algorithms=[settings.auth_jwt_algorithm],
        issuer=settings.auth_jwt_issuer,
        options=options,
    )


def get_current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(AUTH_SCHEME),
) -> Dict[str, Any]:
    if creds is None or not creds.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization token",
        )
    try:
        payload = decode_token(creds.credentials)
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token"
        )

    user_id = str(payload.get("sub", "")).strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token subject"
        )
    return {
        "id": user_id,
        "email": payload.get("email"),
    }


def ensure_same_user(user: Dict[str, Any], user_id: str | None) -> None:
    """Reject requests acting on behalf of another user."""
    if user_id and user_id != user["id"]:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="User mismatch"
        )
