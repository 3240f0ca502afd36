"""Authentication service for registration, login and invitations."""

from typing import Annotated

import structlog
from fastapi import Depends
from sqlalchemy.exc import IntegrityError

from assetflow.api.dependencies import DBSession
from assetflow.core.auth.backend import (
    create_access_token,
    hash_password,
    verify_password,
)
from assetflow.core.auth.schemas import Identity
from assetflow.core.errors import ConflictError, NotFoundError, UnauthorizedError
from assetflow.core.notifications import Mailer, get_mailer, send_welcome_email
from assetflow.core.utils.text import organization_slug_for_email
from assetflow.modules.organizations.models import Organization
from assetflow.modules.organizations.repos import OrganizationRepository
from assetflow.modules.users.models import User, UserRole
from assetflow.modules.users.repos import UserRepository


logger = structlog.get_logger()

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists."


class AuthService:
    """Service for authentication operations.

    Handles self-service registration (which founds an organization),
    login, employee invitations and profile lookup.
    """

    def __init__(
        self,
        db: DBSession,
        mailer: Annotated[Mailer, Depends(get_mailer)],
    ) -> None:
        self.db = db
        self.mailer = mailer
        self.user_repo = UserRepository(db)
        self.organization_repo = OrganizationRepository(db)

    async def register(
        self,
        name: str,
        email: str,
        password: str,
    ) -> tuple[User, str]:
        """Register a new user together with a new organization.

        The user becomes the organization's ADMIN.

        Args:
            name: User's display name
            email: User's email address
            password: Plain text password

        Returns:
            Tuple of (user, access_token)

        Raises:
            ConflictError: If email already exists
        """
        await self._ensure_email_available(email)

        organization = await self.organization_repo.create(
            Organization(
                name=f"{name}'s Organization",
                slug=organization_slug_for_email(email),
            )
        )

        user = await self._create_user(
            User(
                name=name,
                email=email,
                password_hash=hash_password(password),
                role=UserRole.ADMIN.value,
                organization_id=organization.id,
            )
        )

        logger.info(
            "user_registered",
            user_id=user.id,
            organization_id=organization.id,
        )

        await send_welcome_email(self.mailer, email, name, organization.name)

        return user, create_access_token(user)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """Authenticate a user with email and password.

        Returns:
            Tuple of (user, access_token)

        Raises:
            UnauthorizedError: If credentials are invalid
        """
        user = await self.user_repo.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise UnauthorizedError(
                "Invalid email or password.",
                error_code="invalid_credentials",
            )

        logger.info("user_logged_in", user_id=user.id)
        return user, create_access_token(user)

    async def invite(
        self,
        organization_id: int,
        name: str,
        email: str,
        password: str,
    ) -> User:
        """Create an EMPLOYEE in the caller's organization.

        Raises:
            ConflictError: If email already exists
            NotFoundError: If the organization no longer exists
        """
        await self._ensure_email_available(email)

        organization = await self.organization_repo.get_by_id(organization_id)
        if not organization:
            raise NotFoundError(
                "Organization not found",
                resource="organization",
                resource_id=str(organization_id),
            )

        user = await self._create_user(
            User(
                name=name,
                email=email,
                password_hash=hash_password(password),
                role=UserRole.EMPLOYEE.value,
                organization_id=organization_id,
            )
        )

        logger.info("user_invited", user_id=user.id, organization_id=organization_id)

        await send_welcome_email(self.mailer, email, name, organization.name)

        return user

    async def get_me(self, identity: Identity) -> User:
        """Load the caller's current profile.

        Raises:
            NotFoundError: If the user no longer exists
        """
        user = await self.user_repo.get_by_id(identity.id)
        if not user:
            raise NotFoundError("User not found.", resource="user")
        return user

    async def _ensure_email_available(self, email: str) -> None:
        if await self.user_repo.get_by_email(email):
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE, error_code="email_exists")

    async def _create_user(self, user: User) -> User:
        # The unique index on email settles concurrent registrations
        try:
            return await self.user_repo.create(user)
        except IntegrityError as e:
            raise ConflictError(
                DUPLICATE_EMAIL_MESSAGE, error_code="email_exists"
            ) from e


# Type alias for dependency injection
AuthSvc = Annotated[AuthService, Depends(AuthService)]
