from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.accounts.core.services.database import AccountsDbContext, StorageOptions
from src.accounts.entities.core.user_profile import UserProfile


@pytest.fixture
def session() -> Generator[Session]:
    """Create a fresh database session for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Import models to register them with the metadata
    from src.accounts.entities.core.user_profile import UserProfileTable  # noqa: F401

    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        try:
            yield session
        finally:
            session.rollback()
            session.close()
            engine.dispose()


@pytest.fixture
def memory_options() -> StorageOptions:
    return StorageOptions(url="sqlite://")


@pytest.fixture
def file_options(tmp_path: Path) -> StorageOptions:
    return StorageOptions(url=f"sqlite:///{tmp_path / 'accounts.db'}")


@pytest.fixture
def db_context(memory_options: StorageOptions) -> Generator[AccountsDbContext]:
    """A storage context over a fresh in-memory database."""
    context = AccountsDbContext(memory_options)
    context.ensure_created()
    try:
        yield context
    finally:
        context.dispose()


@pytest.fixture
def ada() -> UserProfile:
    return UserProfile(
        user_name="ada",
        email="ada@example.com",
        first_name="Ada",
        last_name="Lovelace",
    )
