"""User profile entity module.

This module contains all UserProfile-related classes organized by responsibility:
- UserProfile: Domain entity with the required name fields
- UserProfileTable: Database persistence model
- UserProfileRepository: Data access layer that validates before writing
"""

from .entity import UserProfile
from .repository import UserProfileRepository
from .table import UserProfileTable

__all__ = ["UserProfile", "UserProfileTable", "UserProfileRepository"]
