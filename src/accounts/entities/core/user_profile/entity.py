"""User profile domain entity."""

from typing import Annotated, Any

from pydantic import Field

from src.accounts.core.validation import Required
from src.accounts.entities.core.identity_user import IdentityUser

_TIMESTAMPS = {"created_at", "updated_at"}


class UserProfile(IdentityUser):
    """A registered human account.

    Adds the profile names to the identity user fields. Both names start out
    empty and must be filled in before the profile can be persisted; that is
    checked by ``validate_account``, not at construction.
    """

    first_name: Annotated[str, Required()] = Field(
        default="", description="User's first name"
    )
    last_name: Annotated[str, Required()] = Field(
        default="", description="User's last name"
    )

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def _business_key(self) -> tuple:
        return tuple(
            (name, getattr(self, name))
            for name in type(self).model_fields
            if name not in _TIMESTAMPS
        )

    def __eq__(self, other: Any) -> bool:
        """Compare profiles by business attributes, ignoring timestamps."""
        if not isinstance(other, UserProfile):
            return False
        return self._business_key() == other._business_key()

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash(self._business_key())
