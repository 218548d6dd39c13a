"""User profile database table model."""

from sqlmodel import Field

from src.accounts.entities.core.identity_user import IdentityUserTable


class UserProfileTable(IdentityUserTable, table=True):
    """Database persistence model for user profiles.

    This represents how the UserProfile entity is stored in the database.
    The name columns are NOT NULL; emptiness is rejected before a write.
    """

    __tablename__ = "user_profiles"

    first_name: str = Field(default="", nullable=False)
    last_name: str = Field(default="", nullable=False)
