"""Identity user columns shared by account tables."""

from datetime import datetime

from sqlmodel import Field

from src.accounts.entities.core._base import EntityTable, new_uuid


class IdentityUserTable(EntityTable, table=False):
    """Column set of the identity storage schema.

    Not a table on its own: concrete account tables inherit these columns.
    """

    user_name: str = Field(default="", nullable=False, max_length=256)
    normalized_user_name: str | None = Field(
        default=None, max_length=256, unique=True, index=True
    )
    email: str | None = Field(default=None, max_length=256)
    normalized_email: str | None = Field(default=None, max_length=256, index=True)
    email_confirmed: bool = False
    password_hash: str | None = None
    security_stamp: str = Field(default_factory=new_uuid)
    concurrency_stamp: str = Field(default_factory=new_uuid)
    phone_number: str | None = None
    phone_number_confirmed: bool = False
    two_factor_enabled: bool = False
    lockout_end: datetime | None = None
    lockout_enabled: bool = False
    access_failed_count: int = 0
