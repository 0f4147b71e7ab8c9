"""
Tax Genius Pro - JWT Token Handling

Session tokens carry the identity claims the identity provider hands us;
viewing-state cookies reuse the same signing scheme with their own type.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

import jwt

from config.settings import Settings, get_settings

from .roles import Role


# =============================================================================
# CONFIGURATION
# =============================================================================

JWT_ALGORITHM = "HS256"

TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_VIEWING = "viewing"


def _signing_key(settings: Optional[Settings]) -> str:
    return (settings or get_settings()).signing_key


# =============================================================================
# TOKEN CREATION
# =============================================================================

def encode_claims(
    claims: Mapping[str, Any],
    token_type: str,
    expires_delta: timedelta,
    settings: Optional[Settings] = None,
) -> str:
    """Sign arbitrary claims with iat/exp and a token type."""
    issued_at = datetime.now(timezone.utc)
    payload = dict(claims)
    payload.update({
        "iat": issued_at,
        "exp": issued_at + expires_delta,
        "type": token_type,
    })
    return jwt.encode(payload, _signing_key(settings), algorithm=JWT_ALGORITHM)


def create_access_token(
    user_id: str,
    role: Role,
    email: Optional[str] = None,
    username: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    permission_overrides: Optional[Mapping[str, bool]] = None,
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    """
    Create a session access token.

    Args:
        user_id: Identity provider user id
        role: Role at sign-in time (refreshed from the profile per request)
        email: User's email
        username: Identity-provider username, matched by route restrictions
        first_name: Given name
        last_name: Family name
        permission_overrides: Stored overrides at sign-in time
        expires_delta: Custom expiration time

    Returns:
        JWT token string
    """
    settings = settings or get_settings()
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.jwt_access_token_expire_hours)

    claims: Dict[str, Any] = {
        "sub": str(user_id),
        "role": role.value,
    }
    if email:
        claims["email"] = email
    if username:
        claims["username"] = username
    if first_name:
        claims["firstName"] = first_name
    if last_name:
        claims["lastName"] = last_name
    if permission_overrides:
        claims["permissionOverrides"] = dict(permission_overrides)

    return encode_claims(claims, TOKEN_TYPE_ACCESS, expires_delta, settings)


# =============================================================================
# TOKEN DECODING
# =============================================================================

def decode_token(token: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Decode and validate a JWT token.

    Raises:
        jwt.InvalidTokenError: If token is invalid or expired
    """
    return jwt.decode(token, _signing_key(settings), algorithms=[JWT_ALGORITHM])


def decode_token_safe(
    token: Optional[str],
    token_type: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Optional[Dict[str, Any]]:
    """
    Decode a JWT token without raising exceptions.

    Returns None if the token is missing, invalid, expired or of another type.
    """
    if not token:
        return None
    try:
        payload = decode_token(token, settings)
    except jwt.InvalidTokenError:
        return None
    if token_type is not None and payload.get("type") != token_type:
        return None
    return payload


def validate_access_token(token: Optional[str], settings: Optional[Settings] = None) -> Optional[Dict[str, Any]]:
    """
    Validate an access token.

    Returns payload if valid, None if invalid.
    """
    return decode_token_safe(token, TOKEN_TYPE_ACCESS, settings)
