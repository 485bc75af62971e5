"""
Wardrobe Backend — Auth Service
================================

What:  Password hashing (bcrypt) and session tokens (PyJWT).
Why:   Registration stores only an irreversible salted hash; login issues a
       signed token that protected routes verify without a database lookup.

Token format (HS256 JWT):
    {
        "id": 7,
        "username": "ana",
        "role": "dancer",
        "iat": 1700000000,
        "exp": 1700003600      # iat + TOKEN_TTL_SECONDS (3600)
    }

bcrypt is CPU-bound (~250ms at cost 12), so callers run hash_password and
verify_password through run_in_threadpool to keep the event loop free.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import bcrypt
import jwt

from wardrobe.config import Settings
from wardrobe.exceptions import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            message=f"Password is too long (maximum {MAX_PASSWORD_BYTES} bytes).",
            field="password",
        )
    return encoded


def hash_password(password: str, rounds: int = 12) -> str:
    """Return a salted bcrypt hash ("$2b$..."), 60 ASCII characters."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Constant-time comparison of a password against a stored bcrypt hash.

    Returns False (never raises) for malformed hashes and over-long passwords,
    so the login path can treat every failure the same way.
    """
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("ascii"))
    except (ValueError, ValidationError):
        return False


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, as recovered from a verified token."""
    id: int
    username: str
    role: str


class TokenService:
    """
    Issues and verifies signed session tokens.

    Built once per application from Settings (the secret never lives in a
    module-level global) and reached through the get_token_service dependency.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl_seconds: int = 3600):
        self._secret = secret
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl_seconds=settings.token_ttl_seconds,
        )

    def issue(self, user_id: int, username: str, role: str, now: Optional[int] = None) -> str:
        """Sign a token for the given user that expires ttl_seconds after `now`."""
        issued_at = int(time.time()) if now is None else now
        payload = {
            "id": user_id,
            "username": username,
            "role": role,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Principal:
        """
        Decode and validate a token.

        Raises:
            AuthenticationError for expired, tampered or malformed tokens and
            for tokens missing any of the id/username/role claims.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError(message="Token has expired. Please log in again.")
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected token: %s", str(e))
            raise AuthenticationError(message="Invalid authentication token.")

        try:
            return Principal(
                id=int(payload["id"]),
                username=str(payload["username"]),
                role=str(payload["role"]),
            )
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError(message="Invalid authentication token.")
