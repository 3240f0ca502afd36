"""Authentication schemas for token handling."""

from datetime import datetime

from pydantic import BaseModel


class Identity(BaseModel):
    """Caller identity decoded from a verified access token.

    Attributes:
        id: The user's ID
        email: The user's email at the time the token was issued
        role: ADMIN or EMPLOYEE
        organization_id: The user's organization, if any
        exp: Token expiration time
    """

    id: int
    email: str
    role: str
    organization_id: int | None = None
    exp: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"
