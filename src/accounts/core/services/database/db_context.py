"""Storage context binding the user profile shape to a database."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, ClassVar

from loguru import logger
from pydantic import BaseModel, Field
from sqlalchemy import StaticPool, text
from sqlalchemy.engine import Engine, make_url
from sqlmodel import Session, SQLModel, create_engine

from src.accounts.entities.core.user_profile import UserProfileRepository, UserProfileTable
from src.accounts.runtime.config.config_data import DatabaseConfig
from src.accounts.runtime.context import get_config

# In-memory SQLite lives inside one connection, so contexts with the same
# in-memory URL share one engine. Maps url -> [engine, open context count].
_memory_engines: dict[str, list] = {}
_memory_engines_lock = threading.Lock()


class StorageOptions(BaseModel):
    """Connection and pooling settings for one storage context."""

    url: str = Field(description="SQLAlchemy connection string")
    echo: bool = Field(default=False, description="Log emitted SQL statements")
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    connect_args: dict[str, Any] = Field(
        default_factory=dict, description="Extra DBAPI connect() arguments"
    )

    @classmethod
    def from_config(cls, db_config: DatabaseConfig) -> "StorageOptions":
        return cls(
            url=db_config.connection_string,
            echo=db_config.echo,
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_recycle=db_config.pool_recycle,
        )

    @property
    def backend(self) -> str:
        return make_url(self.url).get_backend_name()

    @property
    def is_in_memory(self) -> bool:
        url = make_url(self.url)
        if url.get_backend_name() != "sqlite":
            return False
        return url.database in (None, "", ":memory:") or url.query.get("mode") == "memory"

    @property
    def safe_url(self) -> str:
        return make_url(self.url).render_as_string(hide_password=True)

    def engine_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``create_engine`` matching the backend."""
        connect_args = dict(self.connect_args)
        kwargs: dict[str, Any] = {"echo": self.echo}

        if self.backend == "sqlite":
            connect_args.setdefault("check_same_thread", False)
            connect_args.setdefault("timeout", 20)

        if self.is_in_memory:
            # One shared connection, otherwise every checkout opens a new empty database
            kwargs["poolclass"] = StaticPool
        else:
            kwargs.update(
                {
                    "pool_size": self.pool_size,
                    "max_overflow": self.max_overflow,
                    "pool_timeout": self.pool_timeout,
                    "pool_recycle": self.pool_recycle,
                    "pool_pre_ping": True,
                }
            )

        kwargs["connect_args"] = connect_args
        return kwargs


class AccountsDbContext:
    """Storage context for user profiles.

    Owns its options and engine for its whole lifetime. Contexts opened on
    the same in-memory URL share one engine, and so one store, until the
    last of them is disposed. The stored account
    shape is fixed on the class and does not vary per call. Instances are
    meant for one unit of work at a time and are not safe to share between
    concurrent tasks.
    """

    user_table: ClassVar[type[UserProfileTable]] = UserProfileTable

    def __init__(self, options: StorageOptions):
        self._options = options
        self._disposed = False

        logger.info("Initializing accounts storage at {}", options.safe_url)
        self._engine = self._acquire_engine(options)

    @staticmethod
    def _acquire_engine(options: StorageOptions) -> Engine:
        if not options.is_in_memory:
            return create_engine(options.url, **options.engine_kwargs())

        with _memory_engines_lock:
            entry = _memory_engines.get(options.url)
            if entry is None:
                entry = [create_engine(options.url, **options.engine_kwargs()), 0]
                _memory_engines[options.url] = entry
            entry[1] += 1
            return entry[0]

    def _release_engine(self) -> None:
        if not self._options.is_in_memory:
            self._engine.dispose()
            return

        with _memory_engines_lock:
            entry = _memory_engines.get(self._options.url)
            if entry is None or entry[0] is not self._engine:
                return
            entry[1] -= 1
            if entry[1] == 0:
                del _memory_engines[self._options.url]
                self._engine.dispose()

    @classmethod
    def from_config(cls, db_config: DatabaseConfig | None = None) -> "AccountsDbContext":
        """Build a context from the current application configuration."""
        db_config = db_config or get_config().database
        return cls(StorageOptions.from_config(db_config))

    @property
    def options(self) -> StorageOptions:
        return self._options

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def _ensure_open(self) -> None:
        if self._disposed:
            raise RuntimeError("Storage context has been disposed")

    def ensure_created(self) -> None:
        """Create the tables of the bound account shape if they are missing."""
        self._ensure_open()
        SQLModel.metadata.create_all(self._engine, tables=[self.user_table.__table__])
        logger.info("Database initialized with table {}", self.user_table.__tablename__)

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to this context's engine."""
        self._ensure_open()
        return Session(
            self._engine,
            expire_on_commit=False,
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """One unit of work: commit on success, roll back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise
        finally:
            db.close()

    def users(self, session: Session) -> UserProfileRepository:
        """Collection view over the stored user profiles for ``session``."""
        return UserProfileRepository(session)

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(
                "Database health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

    def get_pool_status(self) -> dict:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool
        return {
            "size": getattr(pool, "size", lambda: 0)(),
            "checked_in": getattr(pool, "checkedin", lambda: 0)(),
            "checked_out": getattr(pool, "checkedout", lambda: 0)(),
            "overflow": getattr(pool, "overflow", lambda: 0)(),
        }

    def dispose(self) -> None:
        """Release pooled connections; the context cannot be used afterwards."""
        if self._disposed:
            return
        self._release_engine()
        self._disposed = True
        logger.debug("Disposed accounts storage at {}", self._options.safe_url)

    def __enter__(self) -> "AccountsDbContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()
