"""
Authentication helpers: password hashing, access tokens and bearer extraction
"""

import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Mapping

import bcrypt
import jwt

TOKEN_ISSUER = "tubely-access"
JWT_ALGORITHM = "HS256"


class AuthError(Exception):
    """Raised when a credential is missing, malformed or fails validation"""


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def check_password_hash(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def make_jwt(user_id: uuid.UUID, secret: str, expires_in: timedelta) -> str:
    """Sign an access token whose subject is the user id"""
    now = datetime.now(timezone.utc)
    claims = {
        "iss": TOKEN_ISSUER,
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(claims, secret, algorithm=JWT_ALGORITHM)


def validate_jwt(token: str, secret: str) -> uuid.UUID:
    """
    Validate a signed access token and return the user id it was issued for.

    Raises:
        AuthError: the signature, expiry or issuer does not check out, or the
            subject is not a UUID
    """
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            issuer=TOKEN_ISSUER,
            options={"require": ["exp", "iss", "sub"]},
        )
    except jwt.PyJWTError as e:
        raise AuthError(f"Invalid token: {e}") from e

    try:
        return uuid.UUID(claims["sub"])
    except (ValueError, TypeError) as e:
        raise AuthError("Invalid user ID in token subject") from e


def get_bearer_token(headers: Mapping[str, str]) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header"""
    auth_header = headers.get("Authorization")
    if not auth_header:
        raise AuthError("Authorization header missing")

    scheme, _, token = auth_header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthError("Malformed authorization header")
    return token


def make_refresh_token() -> str:
    return secrets.token_hex(32)
