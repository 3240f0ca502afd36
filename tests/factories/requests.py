"""Factories for API request payloads."""

from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from assetflow.modules.assets.schemas import AssetCreate
from assetflow.modules.users.schemas import InviteRequest, RegisterRequest


class RegisterRequestFactory(ModelFactory[RegisterRequest]):
    """Factory for registration payloads."""

    __model__ = RegisterRequest

    @classmethod
    def name(cls) -> str:
        return f"Test User {uuid4().hex[:4]}"

    @classmethod
    def email(cls) -> str:
        """Generate a unique email."""
        return f"user-{uuid4().hex[:8]}@example.com"

    @classmethod
    def password(cls) -> str:
        return "password123"


class InviteRequestFactory(RegisterRequestFactory):
    """Factory for invitation payloads."""

    __model__ = InviteRequest  # type: ignore[assignment]


class AssetCreateFactory(ModelFactory[AssetCreate]):
    """Factory for asset registration payloads."""

    __model__ = AssetCreate

    @classmethod
    def name(cls) -> str:
        return f"Laptop {uuid4().hex[:4]}"

    @classmethod
    def serial_number(cls) -> str:
        return f"SN-{uuid4().hex[:10].upper()}"

    @classmethod
    def type(cls) -> str:
        return "Laptop"

    @classmethod
    def location(cls) -> str:
        return "HQ"
