"""
Bearer-token authentication for MarketLink

Tokens are HS256 JWTs signed with AUTH_SECRET. They carry the account id,
email, display name and one of the roles below. Issuing tokens for real
logins is handled outside this service; create_access_token exists for the
seed script and tests.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import BaseModel

from marketlink.core.config import settings


bearer_scheme = HTTPBearer(auto_error=False)

ROLES = ("supplier", "supermarket", "admin")


class TokenUser(BaseModel):
    """Caller identity taken from the bearer token"""
    id: str
    email: str
    name: Optional[str] = None
    role: str = "supermarket"


def _signing_key() -> str:
    if not settings.AUTH_SECRET:
        raise ValueError("AUTH_SECRET is not configured")
    return settings.AUTH_SECRET


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"}
    )


def create_access_token(user: TokenUser, expires_in: Optional[timedelta] = None) -> str:
    """Sign a token for user, valid for ACCESS_TOKEN_EXPIRE_MINUTES unless expires_in is given"""
    if expires_in is None:
        expires_in = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims = {
        "id": user.id,
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(claims, _signing_key(), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    Verify signature and expiry, returning the claims

    Raises:
        HTTPException(401): expired, malformed or wrongly signed token
    """
    try:
        return jwt.decode(
            token,
            _signing_key(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False}
        )
    except JWTError as e:
        if "expired" in str(e).lower():
            raise _unauthorized("Token has expired")
        raise _unauthorized(f"Invalid token: {e}")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> TokenUser:
    """
    FastAPI dependency resolving the caller from the Authorization header

    The account id is read from "id", falling back to "sub"; tokens without
    an id or email are refused.
    """
    if not credentials:
        raise _unauthorized("Authentication required")

    claims = decode_access_token(credentials.credentials)

    account_id = claims.get("id") or claims.get("sub")
    if not account_id or not claims.get("email"):
        raise _unauthorized("Invalid token payload: missing user id or email")

    return TokenUser(
        id=str(account_id),
        email=claims["email"],
        name=claims.get("name"),
        role=claims.get("role") or "supermarket"
    )


def require_roles(*allowed_roles: str):
    """
    Build a dependency that admits admins and the given roles

        @router.get("/buyers")
        async def buyers(user: TokenUser = Depends(require_roles("supplier"))):
            ...
    """
    async def role_checker(user: TokenUser = Depends(get_current_user)) -> TokenUser:
        if user.role != "admin" and user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required role: {', '.join(allowed_roles)}, your role: {user.role}"
            )
        return user

    return role_checker


require_supplier = require_roles("supplier")
require_supermarket = require_roles("supermarket")
