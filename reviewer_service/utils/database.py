"""Database handle: engine, sessions and schema lifecycle."""
import logging
from contextlib import contextmanager
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from reviewer_service.config.settings import DatabaseConfig

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one process.

    Created once at startup (app factory or CLI), handed to the stores, and
    disposed at shutdown.
    """

    def __init__(self, url: str, pool_size: int = 5, max_overflow: int = 10,
                 pool_recycle: int = 3600, echo: bool = False):
        """Initialize the database handle.

        Args:
            url: SQLAlchemy database URL
            pool_size: Persistent connections per process (PostgreSQL only)
            max_overflow: Extra connections allowed under load (PostgreSQL only)
            pool_recycle: Recycle connections after this many seconds
            echo: Log every SQL statement
        """
        self.url = url
        engine_kwargs = {"echo": echo}

        if url.startswith("sqlite"):
            # SQLite doesn't support pool_size/max_overflow parameters
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
                # One shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update({
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_pre_ping": True,  # Verify connections before using (prevents stale connections)
                "pool_recycle": pool_recycle,
            })

        self.engine = create_engine(url, **engine_kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        logger.info(f"Database engine initialized ({self.engine.dialect.name})")

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> "Database":
        return cls(
            config.url,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_recycle=config.pool_recycle,
            echo=config.echo,
        )

    def get_session(self):
        """Get a new database session."""
        return self._session_factory()

    @contextmanager
    def session_scope(self):
        """Provide a transactional scope around a series of operations.

        Usage:
            with database.session_scope() as session:
                # use session here
                # automatically commits on success, rolls back on error
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def init_database(self) -> None:
        """Create all tables that don't exist yet."""
        # Import all models to ensure they're registered
        from reviewer_service.models import Base, Team, User, PullRequest, PullRequestReviewer  # noqa: F401

        Base.metadata.create_all(self.engine)
        logger.info("Database tables created/verified")

    def drop_all(self) -> None:
        from reviewer_service.models import Base

        Base.metadata.drop_all(self.engine)

    def dispose(self) -> None:
        """Clean up database connections (useful for worker shutdown)."""
        try:
            self.engine.dispose()
            logger.info("Database engine disposed successfully")
        except Exception as e:
            logger.warning(f"Error disposing database engine: {e}")
