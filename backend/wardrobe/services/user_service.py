"""
Wardrobe Backend — User Service
================================

What:  Registration, profile lookup and login.
Why:   Keeps credential handling (hashing, constant-time comparison, uniform
       error messages) out of the route layer.

Login failure policy:
    Unknown username and wrong password produce the same AuthenticationError
    with the same message, so the response reveals nothing about which
    usernames exist.
"""

import logging
import secrets
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from wardrobe.database import is_unique_violation
from wardrobe.exceptions import AuthenticationError, ConflictError, DatabaseError, NotFoundError
from wardrobe.models import User
from wardrobe.models.user import USER_ROLES
from wardrobe.schemas.user import LoginRequest, LoginResponse, UserCreate
from wardrobe.services.auth_service import TokenService, hash_password, verify_password
from wardrobe.services.existence import user_exists
from wardrobe.services.validation import require_choice, require_fields

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class UserService:

    def __init__(self, bcrypt_rounds: int = 12):
        self.bcrypt_rounds = bcrypt_rounds
        self._placeholder_hashes: Dict[int, str] = {}

    async def register(self, db: AsyncSession, body: UserCreate, bcrypt_rounds: Optional[int] = None) -> User:
        """
        Create an account.

        Raises:
            ValidationError: missing field, unknown role, password over 72 bytes
            ConflictError:   username taken
        """
        require_fields("user", username=body.username, password=body.password, role=body.role)
        require_choice(body.role, USER_ROLES, "role")

        if await user_exists(db, body.username):
            raise ConflictError(message=f"The username '{body.username}' is already taken.")

        rounds = bcrypt_rounds or self.bcrypt_rounds
        password_hash = await run_in_threadpool(hash_password, body.password, rounds)

        user = User(username=body.username, password_hash=password_hash, role=body.role)
        db.add(user)
        try:
            await db.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise ConflictError(message=f"The username '{body.username}' is already taken.")
            logger.error("Integrity error registering '%s': %s", body.username, str(e.orig))
            raise DatabaseError(context={"operation": "register"})

        logger.info("User %s registered: username=%s role=%s", user.id, user.username, user.role)
        return user

    async def get_profile(self, db: AsyncSession, username: str) -> User:
        user = await db.scalar(select(User).where(User.username == username))
        if user is None:
            raise NotFoundError(resource="user", resource_id=username)
        return user

    async def login(
        self,
        db: AsyncSession,
        body: LoginRequest,
        tokens: TokenService,
        bcrypt_rounds: Optional[int] = None,
    ) -> LoginResponse:
        """
        Verify credentials and issue a session token.

        An unknown username still runs one bcrypt check against a placeholder
        hash of the same cost, so both failures take about as long.

        Raises:
            ValidationError:     username or password missing
            AuthenticationError: unknown user or wrong password (same message)
        """
        require_fields("login", username=body.username, password=body.password)

        user = await db.scalar(select(User).where(User.username == body.username))
        if user is None:
            placeholder = await self._placeholder_hash(bcrypt_rounds or self.bcrypt_rounds)
            await run_in_threadpool(verify_password, body.password, placeholder)
            logger.info("Login failed: unknown username")
            raise AuthenticationError(message=INVALID_CREDENTIALS)

        if not await run_in_threadpool(verify_password, body.password, user.password_hash):
            logger.info("Login failed for user %s: wrong password", user.id)
            raise AuthenticationError(message=INVALID_CREDENTIALS)

        token = tokens.issue(user.id, user.username, user.role)
        logger.info("User %s logged in", user.id)
        return LoginResponse(message="Login successful", token=token, username=user.username)

    async def _placeholder_hash(self, rounds: int) -> str:
        if rounds not in self._placeholder_hashes:
            self._placeholder_hashes[rounds] = await run_in_threadpool(
                hash_password, secrets.token_urlsafe(16), rounds
            )
        return self._placeholder_hashes[rounds]


user_service = UserService()
