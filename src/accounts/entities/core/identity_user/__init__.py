"""Identity user attribute set shared by every account shape."""

from .entity import IdentityAccount, IdentityUser, normalize_key
from .table import IdentityUserTable

__all__ = ["IdentityAccount", "IdentityUser", "IdentityUserTable", "normalize_key"]
