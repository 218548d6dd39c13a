"""Data access layer for user profiles."""

from typing import Any

from loguru import logger
from sqlmodel import Session, func, select

from src.accounts.core.validation import ensure_valid
from src.accounts.entities.core._base import new_uuid, utc_now
from src.accounts.entities.core.identity_user import normalize_key

from .entity import UserProfile
from .table import UserProfileTable

# Columns that never change once a row exists.
_IMMUTABLE = {"id", "created_at"}


class UserProfileRepository:
    """Queryable, mutable collection of user profiles bound to one session.

    Writes go through ``ensure_valid`` so an invalid profile never reaches
    the session. Commit and rollback belong to the caller's unit of work.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _to_entity(row: UserProfileTable) -> UserProfile:
        return UserProfile.model_validate(row, from_attributes=True)

    def get(self, profile_id: str) -> UserProfile | None:
        row = self._session.get(UserProfileTable, profile_id)
        if row is None:
            return None
        return self._to_entity(row)

    def get_by_user_name(self, user_name: str) -> UserProfile | None:
        statement = select(UserProfileTable).where(
            UserProfileTable.normalized_user_name == normalize_key(user_name)
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return self._to_entity(row)

    def get_by_email(self, email: str) -> UserProfile | None:
        statement = select(UserProfileTable).where(
            UserProfileTable.normalized_email == normalize_key(email)
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return self._to_entity(row)

    def find(self, *predicates: Any) -> list[UserProfile]:
        """Return profiles matching every SQL predicate over ``UserProfileTable``."""
        statement = select(UserProfileTable).where(*predicates)
        return [self._to_entity(row) for row in self._session.exec(statement).all()]

    def list_all(self, limit: int | None = None, offset: int = 0) -> list[UserProfile]:
        statement = (
            select(UserProfileTable)
            .order_by(UserProfileTable.created_at)
            .offset(offset)
            .limit(limit)
        )
        return [self._to_entity(row) for row in self._session.exec(statement).all()]

    def count(self) -> int:
        statement = select(func.count()).select_from(UserProfileTable)
        return self._session.exec(statement).one()

    def create(self, profile: UserProfile) -> UserProfile:
        """Validate and add ``profile``; returns the same entity."""
        profile.normalize()
        ensure_valid(profile)

        row = UserProfileTable.model_validate(profile, from_attributes=True)
        self._session.add(row)
        logger.debug("Added user profile {}", profile.id)
        return profile

    def update(self, profile: UserProfile) -> UserProfile | None:
        """Copy ``profile`` onto its stored row; returns None if there is no row."""
        profile.normalize()
        ensure_valid(profile)

        row = self._session.get(UserProfileTable, profile.id)
        if row is None:
            return None

        profile.concurrency_stamp = new_uuid()
        profile.updated_at = utc_now()
        for name, value in profile.model_dump(exclude=_IMMUTABLE).items():
            setattr(row, name, value)
        self._session.add(row)
        logger.debug("Updated user profile {}", profile.id)
        return profile

    def delete(self, profile_id: str) -> bool:
        row = self._session.get(UserProfileTable, profile_id)
        if row is None:
            return False
        self._session.delete(row)
        logger.debug("Deleted user profile {}", profile_id)
        return True
