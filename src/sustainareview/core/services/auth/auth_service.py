"""Account registration, login and password management."""

import re
from datetime import timedelta

from fastapi import HTTPException
from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from src.sustainareview.core.models.auth import AccessToken
from src.sustainareview.core.security import (
    generate_secure_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.sustainareview.core.services.email.email_service import (
    EmailDeliveryError,
    EmailService,
)
from src.sustainareview.core.services.jwt.jwt_gen import JwtGeneratorService
from src.sustainareview.entities._base import utcnow
from src.sustainareview.entities.core.password_reset import (
    PasswordResetToken,
    PasswordResetTokenRepository,
)
from src.sustainareview.entities.core.user import User, UserRepository
from src.sustainareview.runtime.context import get_config

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

RESET_REQUEST_MESSAGE = (
    "If an account exists for that email, a password reset link has been sent."
)


class AuthService:
    def __init__(
        self,
        db_session: Session,
        jwt_service: JwtGeneratorService,
        email_service: EmailService,
    ):
        self._db_session = db_session
        self._jwt_service = jwt_service
        self._email_service = email_service
        self._user_repo = UserRepository(db_session)
        self._reset_repo = PasswordResetTokenRepository(db_session)

    def _check_password_strength(self, password: str) -> None:
        min_length = get_config().security.min_password_length
        if len(password) < min_length:
            raise HTTPException(
                status_code=400,
                detail=f"Password must be at least {min_length} characters long",
            )

    def register(self, username: str, email: str, password: str) -> User:
        """Create an account.

        Raises:
            HTTPException: 400 for malformed input, 409 when the username or
                email is already taken
        """
        username = username.strip()
        email = email.strip().lower()

        if not 3 <= len(username) <= 100:
            raise HTTPException(
                status_code=400, detail="Username must be between 3 and 100 characters"
            )
        if len(email) > 255 or not EMAIL_PATTERN.match(email):
            raise HTTPException(status_code=400, detail="Invalid email address")
        self._check_password_strength(password)

        if self._user_repo.get_by_username(username) is not None:
            raise HTTPException(status_code=409, detail="Username already exists")
        if self._user_repo.get_by_email(email) is not None:
            raise HTTPException(status_code=409, detail="Email already exists")

        try:
            user = self._user_repo.create(
                User(username=username, email=email, password_hash=hash_password(password))
            )
            self._db_session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration
            self._db_session.rollback()
            raise HTTPException(
                status_code=409, detail="Username or email already exists"
            ) from e

        logger.info("Registered user {}", user.id)
        return user

    def login(self, email: str, password: str) -> AccessToken:
        """Exchange credentials for a bearer token.

        Raises:
            HTTPException: 401 on unknown email or wrong password
        """
        user = self._user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise HTTPException(status_code=401, detail="Invalid email or password")

        token = self._jwt_service.generate_access_token(user.id, user.username)
        logger.info("User {} logged in", user.id)
        return AccessToken(
            user_id=user.id,
            username=user.username,
            access_token=token,
            expires_in=get_config().jwt.access_token_ttl_seconds,
        )

    def request_password_reset(self, email: str) -> str:
        """Issue and email a reset token when the account exists.

        Returns the same message either way so the endpoint cannot be used to
        probe for registered emails.
        """
        email = email.strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise HTTPException(status_code=400, detail="Invalid email address")

        user = self._user_repo.get_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return RESET_REQUEST_MESSAGE

        token = self.issue_reset_token(user.id)
        try:
            self._email_service.send_password_reset(user.email, token)
        except EmailDeliveryError as e:
            logger.error("Could not deliver password reset email for user {}: {}", user.id, e)
        return RESET_REQUEST_MESSAGE

    def issue_reset_token(self, user_id: str) -> str:
        """Store a new reset grant and return the raw token."""
        token = generate_secure_token()
        ttl = get_config().security.reset_token_ttl_seconds
        self._reset_repo.create(
            PasswordResetToken(
                user_id=user_id,
                token_hash=hash_token(token),
                expires_at=utcnow() + timedelta(seconds=ttl),
            )
        )
        self._db_session.commit()
        return token

    def reset_password(self, reset_token: str, new_password: str) -> None:
        """Consume a reset token and set the new password.

        Raises:
            HTTPException: 400 for a weak password, 401 for an unknown, used
                or expired token
        """
        if not reset_token:
            raise HTTPException(status_code=400, detail="Reset token is required")
        self._check_password_strength(new_password)

        grant = self._reset_repo.get_by_token_hash(hash_token(reset_token))
        if grant is None or not grant.is_usable():
            raise HTTPException(status_code=401, detail="Invalid or expired reset token")

        self._user_repo.update_password(grant.user_id, hash_password(new_password))
        self._reset_repo.mark_used(grant.id, utcnow())
        self._db_session.commit()
        logger.info("Password reset completed for user {}", grant.user_id)

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        """Change the password of an authenticated user.

        Raises:
            HTTPException: 403 when the current password is wrong, 400 for a
                weak new password
        """
        stored = self._user_repo.get(user.id)
        if stored is None:
            raise HTTPException(status_code=404, detail="User not found")
        if not verify_password(current_password, stored.password_hash):
            raise HTTPException(status_code=403, detail="Current password is incorrect")
        self._check_password_strength(new_password)

        self._user_repo.update_password(user.id, hash_password(new_password))
        self._db_session.commit()
        logger.info("Password changed for user {}", user.id)
