"""Entities module with entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model
- table.py: Database persistence model
- repository.py: Data access layer (where the entity is stored directly)
"""

from .core.identity_user import IdentityAccount, IdentityUser, IdentityUserTable
from .core.user_profile import UserProfile, UserProfileRepository, UserProfileTable

__all__ = [
    "IdentityAccount",
    "IdentityUser",
    "IdentityUserTable",
    "UserProfile",
    "UserProfileTable",
    "UserProfileRepository",
]
