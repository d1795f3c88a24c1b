"""
VeggieFresh Admin API — Auth Service
======================================

What:  Admin login, token refresh and user lookup for the auth dependency.
How:   Looks the user up by email (exact match), checks the admin role,
       verifies the bcrypt hash off the event loop and issues an
       access/refresh token pair.

Error mapping:
    unknown email / no password / wrong password → AuthenticationError (401)
    not an admin                                 → AuthorizationError (403)
    missing JWT_SECRET                           → ConfigurationError (500)
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.exceptions import AuthenticationError, AuthorizationError, DatabaseError
from app.models.user import User
from app.schemas.auth import AdminUser, AuthTokens
from app.security import REFRESH_TOKEN, create_token_pair, decode_token, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Stateless; every call receives the request's session."""

    async def login(self, db: AsyncSession, email: str, password: str) -> AuthTokens:
        """
        Authenticates an admin by email and password.

        The role is checked before the password: a non-admin account gets
        403 without a bcrypt comparison.
        """
        user = await self._find_by_email(db, email)
        if user is None or not user.password_hash:
            logger.warning("Admin login failed: unknown account")
            raise AuthenticationError(message="Invalid credentials")

        if not user.is_admin:
            logger.warning("Admin login refused: user %s has role '%s'", user.id, user.role)
            raise AuthorizationError(message="Admin access required")

        # bcrypt is CPU-bound; keep it off the event loop
        valid = await run_in_threadpool(verify_password, password, user.password_hash)
        if not valid:
            logger.warning("Admin login failed: bad password for user %s", user.id)
            raise AuthenticationError(message="Invalid credentials")

        logger.info("Admin %s logged in", user.id)
        return self._issue_tokens(user)

    async def refresh(self, db: AsyncSession, refresh_token: str) -> AuthTokens:
        """Exchanges a valid refresh token for a new token pair."""
        payload = decode_token(refresh_token, expected_type=REFRESH_TOKEN)
        user = await self.get_user(db, payload["userId"])
        if user is None:
            raise AuthenticationError(message="User not found")
        if not user.is_admin:
            raise AuthorizationError(message="Admin access required")
        return self._issue_tokens(user)

    async def get_user(self, db: AsyncSession, user_id: str) -> Optional[User]:
        """Returns the user with `user_id`, or None (also for malformed ids)."""
        try:
            uid = uuid.UUID(str(user_id))
        except ValueError:
            return None
        try:
            result = await db.execute(select(User).where(User.id == uid))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error loading user %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": str(user_id)})

    @staticmethod
    def to_admin_user(user: User) -> AdminUser:
        return AdminUser.model_validate(user)

    async def _find_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login lookup: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

    def _issue_tokens(self, user: User) -> AuthTokens:
        access_token, refresh_token = create_token_pair(str(user.id))
        return AuthTokens(
            user=self.to_admin_user(user),
            access_token=access_token,
            refresh_token=refresh_token,
        )


auth_service = AuthService()
