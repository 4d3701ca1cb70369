# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Verifies Supabase Auth access tokens.
#
# Supports both:
# - ES256 (Supabase JWT signing keys) via the project's JWKS endpoint
# - HS256 (legacy SUPABASE_JWT_SECRET)
#
# Browsing the directories is public; get_current_user_optional lets those
# endpoints personalise when a token is present. Follows, RSVPs, reviews and
# the dashboard use get_current_user.
# =============================================================================

import logging
import time
from typing import Any, Optional
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.config import settings
from app.auth.models import AuthUser

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer()
security_optional = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict[str, Any] = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _fetch_jwks() -> dict[str, Any]:
    """Fetch the project's JWKS, cached for JWKS_CACHE_TTL seconds."""
    global _jwks_cache, _jwks_cache_time

    now = time.time()
    if _jwks_cache and (now - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    jwks_url = f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/.well-known/jwks.json"
    try:
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = now
        logger.debug(f"Fetched JWKS from {jwks_url}")
    except httpx.HTTPError as e:
        # Stale keys beat no keys
        logger.warning(f"Failed to fetch JWKS: {e}")
    return _jwks_cache or {"keys": []}


def _signing_key(token: str) -> tuple[Any, str]:
    """
    Pick the verification key for a token.

    Returns:
        (key, algorithm); the legacy secret with HS256 when no JWK matches
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        return settings.SUPABASE_JWT_SECRET, "HS256"

    alg = header.get("alg", "HS256")
    kid = header.get("kid")
    if alg == "HS256" or not kid:
        return settings.SUPABASE_JWT_SECRET, "HS256"

    for key in _fetch_jwks().get("keys", []):
        if key.get("kid") == kid:
            return key, alg

    logger.warning(f"No JWK for alg={alg}, kid={kid}; falling back to HS256")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def decode_access_token(token: str) -> AuthUser:
    """
    Verify a Supabase access token and extract the user.

    Raises:
        HTTPException: 401 if the token is invalid, expired or has no user id
    """
    key, algorithm = _signing_key(token)

    try:
        payload = jwt.decode(token, key, algorithms=[algorithm], audience="authenticated")
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized(f"Invalid token: {e}")

    try:
        user_id = UUID(payload.get("sub") or "")
    except ValueError:
        logger.warning(f"Token has no usable 'sub' claim: {payload.get('sub')!r}")
        raise _unauthorized("Invalid token: missing user ID")

    return AuthUser(id=user_id, email=payload.get("email"))


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Require a signed-in user.

    Usage:
        @router.get("/dashboard")
        async def dashboard(user: AuthUser = Depends(get_current_user)):
            ...
    """
    user = decode_access_token(credentials.credentials)
    logger.debug(f"Authenticated user: {user.id}")
    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional)
) -> Optional[AuthUser]:
    """
    Signed-in user if a valid token was sent, None otherwise.

    An invalid token is treated as anonymous browsing rather than an error.
    """
    if credentials is None:
        return None

    try:
        return decode_access_token(credentials.credentials)
    except HTTPException:
        return None
