# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Bearer-token authentication for the admin surface.
#
# Token verification supports both Supabase signing schemes:
# - ES256/RS256 signing keys published at the project's JWKS endpoint
# - HS256 with the legacy project JWT secret
#
# Admin access additionally requires a profiles row with is_admin or
# is_editor set.
#
# Usage:
#   from app.auth import require_admin, AdminUser
#
#   @router.post("/poets")
#   async def create(admin: AdminUser = Depends(require_admin)): ...
# =============================================================================

import logging
import time
from typing import Any
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError

from app.config import settings
from app.auth.models import AdminUser, AuthUser
from app.exceptions import AdminRequiredError
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer()

JWKS_CACHE_TTL = 3600  # 1 hour
_jwks: dict[str, Any] = {"keys": [], "fetched_at": 0.0}


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _signing_keys() -> list[dict[str, Any]]:
    """
    Public keys from the Supabase JWKS endpoint, cached for an hour.

    A failed refresh keeps serving the previous keys.
    """
    if _jwks["keys"] and time.time() - _jwks["fetched_at"] < JWKS_CACHE_TTL:
        return _jwks["keys"]

    url = f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/.well-known/jwks.json"
    try:
        response = httpx.get(url, timeout=10)
        response.raise_for_status()
        _jwks["keys"] = response.json().get("keys", [])
        _jwks["fetched_at"] = time.time()
        logger.debug(f"Fetched {len(_jwks['keys'])} signing keys from {url}")
    except Exception as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
    return _jwks["keys"]


def _legacy_secret() -> str:
    """The HS256 project secret; tokens cannot fall back to it when unset."""
    if not settings.SUPABASE_JWT_SECRET:
        logger.warning("HS256 token received but SUPABASE_JWT_SECRET is not configured")
        raise _unauthorized("Invalid token: unsupported signing key")
    return settings.SUPABASE_JWT_SECRET


def _verification_key(token: str) -> tuple[Any, str]:
    """
    Pick (key, algorithm) for a token from its unverified header.

    Raises:
        HTTPException: 401 if no usable key exists for the token
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise _unauthorized(f"Invalid token: {e}")

    alg = header.get("alg", "HS256")
    kid = header.get("kid")
    if alg == "HS256" or not kid:
        return _legacy_secret(), "HS256"

    for key in _signing_keys():
        if key.get("kid") == kid:
            return key, alg

    logger.warning(f"No signing key for alg={alg}, kid={kid}")
    raise _unauthorized("Invalid token: unknown signing key")


def decode_token(token: str) -> AuthUser:
    """
    Verify a Supabase access token and return its user.

    Raises:
        HTTPException: 401 if the token is expired, forged or malformed
    """
    key, algorithm = _verification_key(token)
    try:
        payload = jwt.decode(token, key, algorithms=[algorithm], audience="authenticated")
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized(f"Invalid token: {e}")

    subject = payload.get("sub")
    if not subject:
        raise _unauthorized("Invalid token: missing user ID")
    try:
        user_id = UUID(subject)
    except ValueError:
        raise _unauthorized("Invalid token: malformed user ID")

    return AuthUser(id=user_id, email=payload.get("email"))


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from the Authorization header.

    Raises:
        HTTPException: 401 if token is missing, invalid or expired
    """
    user = decode_token(credentials.credentials)
    logger.debug(f"Authenticated user: {user.id}")
    return user


def fetch_profile(user_id: UUID) -> dict[str, Any] | None:
    """The user's profiles row, or None if it doesn't exist yet."""
    return SupabaseClient.fetch_row(
        "profiles",
        "id",
        user_id,
        select="id, display_name, avatar_url, is_admin, is_editor",
        include_deleted=True,
    )


async def require_admin(user: AuthUser = Depends(get_current_user)) -> AdminUser:
    """
    Allow only users whose profile has is_admin or is_editor.

    Raises:
        AdminRequiredError: 403 for authenticated users without the role
    """
    profile = fetch_profile(user.id) or {}
    is_admin = bool(profile.get("is_admin"))
    is_editor = bool(profile.get("is_editor"))

    if not (is_admin or is_editor):
        logger.warning(f"User {user.id} denied admin access")
        raise AdminRequiredError(str(user.id))

    return AdminUser(id=user.id, email=user.email, is_admin=is_admin, is_editor=is_editor)
