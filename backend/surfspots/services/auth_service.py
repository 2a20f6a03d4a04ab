"""
SurfSpots Backend — Authentication Services
=============================================

What:  Access-token issuance (AuthService) and operator creation (UserService).
How:   Inputs go through the same sanitize → validate pipeline as spots.
       Every login failure (bad shape, unknown e-mail, wrong password)
       raises the same AuthenticationError so callers cannot discover which
       e-mails are registered.
Who:   AuthService is used by POST /auth/token; UserService by the CLI.
"""

import logging

from surfspots.exceptions import AuthenticationError, ConflictError, ValidationError, Violation
from surfspots.security import ROLE_NAMES, Role, create_access_token, hash_password, verify_password
from surfspots.stores.user_store import (
    EmailTakenError,
    SqlUserStore,
    User,
    UserCreationEntry,
    UserNotFoundError,
)
from surfspots.validation import Validator
from surfspots.validation import conditions as c

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, user_store: SqlUserStore):
        self.user_store = user_store

    async def token(self, email: str, password: str) -> str:
        """
        Exchange credentials for a signed access token.

        Raises:
            AuthenticationError: for any invalid or unknown credentials.
        """
        email = email.strip()

        v = Validator()
        v.if_false(c.is_email(email), Violation.INVALID_EMAIL)
        v.if_false(c.string_not_empty(password), Violation.INVALID_PASSWORD)
        try:
            v.validate()
        except ValidationError:
            raise AuthenticationError()

        try:
            user = await self.user_store.user_by_email(email)
        except UserNotFoundError:
            logger.info("Token refused: unknown e-mail")
            raise AuthenticationError()

        if not verify_password(password, user.password_hash):
            logger.info("Token refused: wrong password for user %s", user.id)
            raise AuthenticationError()

        return create_access_token(user.id, user.email, user.role)


class UserService:
    def __init__(self, user_store: SqlUserStore):
        self.user_store = user_store

    async def create_user(self, email: str, password: str, role: str) -> User:
        """
        Validate and register a new operator.

        Raises:
            ValidationError: every invalid field among e-mail, password, role.
            ConflictError: the e-mail is already registered.
        """
        email = email.strip()
        role = role.strip().lower()

        v = Validator()
        v.if_false(c.is_email(email), Violation.INVALID_EMAIL)
        v.if_false(c.is_password(password), Violation.INVALID_PASSWORD)
        v.if_false(c.is_role(role, ROLE_NAMES), Violation.INVALID_ROLE)
        v.validate()

        entry = UserCreationEntry(
            email=email,
            role=Role(role),
            password_hash=hash_password(password),
        )
        try:
            return await self.user_store.create_user(entry)
        except EmailTakenError:
            raise ConflictError(
                message="This e-mail has already been taken.",
                context={"email": email},
            )
