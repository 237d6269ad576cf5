"""
AquaGuard Backend — Authentication Service
============================================

What:  Verifies username/password pairs against the users table.
How:   Looks the user up by username, then compares the password with the
       stored salted hash (werkzeug check_password_hash).
Who:   Called by POST /api/login and by the seeder (hash_password).

No session or token is created; the caller keeps the returned username in
memory for as long as it considers the user signed in.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import check_password_hash, generate_password_hash

from app.exceptions import AuthenticationError, DatabaseError
from app.models.user import User
from app.schemas.auth import LoginResponse, UserPublic

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, password)


class AuthService:
    """Stateless; receives the session per call."""

    async def login(self, db: AsyncSession, username: str, password: str) -> LoginResponse:
        """
        Authenticate one username/password pair.

        Returns:
            LoginResponse with the public user data.

        Raises:
            AuthenticationError: Unknown user or wrong password (→ 401)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(select(User).where(User.username == username))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e))
            raise DatabaseError(context={"operation": "login"})

        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for username=%r", username)
            raise AuthenticationError()

        logger.info("User %r logged in", user.username)
        return LoginResponse(user=UserPublic.model_validate(user))


auth_service = AuthService()
