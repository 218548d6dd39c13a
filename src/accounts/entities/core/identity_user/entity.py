"""Identity user domain entity."""

from datetime import UTC, datetime
from typing import Annotated, Protocol, runtime_checkable

from pydantic import Field

from src.accounts.core.validation import Required
from src.accounts.entities.core._base import Entity, new_uuid


def normalize_key(value: str | None) -> str | None:
    """Normalize a login name or email for case-insensitive lookups."""
    if value is None:
        return None
    return value.strip().upper()


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@runtime_checkable
class IdentityAccount(Protocol):
    """Anything that can be stored and authenticated as an account."""

    id: str
    user_name: str
    password_hash: str | None


class IdentityUser(Entity):
    """The authenticatable principal: login, credential hash and contact fields.

    Password hashing, lockout policy and two-factor flows happen elsewhere;
    this entity only holds their state.
    """

    user_name: Annotated[str, Required()] = Field(
        default="", description="Login name"
    )
    normalized_user_name: str | None = Field(
        default=None, description="Upper-cased login name used for lookups"
    )
    email: str | None = Field(default=None, description="Email address")
    normalized_email: str | None = Field(
        default=None, description="Upper-cased email used for lookups"
    )
    email_confirmed: bool = Field(default=False)
    password_hash: str | None = Field(
        default=None, description="Salted and hashed representation of the password"
    )
    security_stamp: str = Field(
        default_factory=new_uuid,
        description="Changes whenever the credentials change",
    )
    concurrency_stamp: str = Field(
        default_factory=new_uuid,
        description="Changes whenever the record is persisted",
    )
    phone_number: str | None = Field(default=None, description="Phone number")
    phone_number_confirmed: bool = Field(default=False)
    two_factor_enabled: bool = Field(default=False)
    lockout_end: datetime | None = Field(
        default=None, description="UTC time at which a lockout ends"
    )
    lockout_enabled: bool = Field(default=False)
    access_failed_count: int = Field(default=0, ge=0)

    def normalize(self) -> None:
        """Refresh the normalized lookup keys from their sources."""
        self.normalized_user_name = normalize_key(self.user_name)
        self.normalized_email = normalize_key(self.email)

    def is_locked_out(self, now: datetime | None = None) -> bool:
        if not self.lockout_enabled or self.lockout_end is None:
            return False
        now = _as_utc(now or datetime.now(UTC))
        return _as_utc(self.lockout_end) > now
