# volume_indexer/database/connection.py

from typing import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, Engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session

from ..core.logging import IndexerLogger, log_with_context, INFO, DEBUG, ERROR
from ..types.configs.config import DatabaseConfig
from .base import Base
from . import tables  # noqa: F401  registers table metadata


class DatabaseManager:
    def __init__(self, config: DatabaseConfig):
        if not config:
            raise ValueError("DatabaseConfig is required")

        self.config = config
        self.logger = IndexerLogger.get_logger(f'database.{self.__class__.__name__.lower()}')
        self._engine = None
        self._session_factory = None
        self._repositories = {}

        log_with_context(self.logger, INFO, "DatabaseManager initialized",
                         db_backend=self.backend_name)

    @property
    def backend_name(self) -> str:
        return make_url(self.config.url).get_backend_name()

    def initialize(self) -> None:
        if self._engine is not None:
            self.logger.warning("Database already initialized")
            return

        try:
            self.logger.info("Initializing database engine")

            engine_kwargs = {"echo": self.config.echo}
            if self.backend_name != "sqlite":
                engine_kwargs.update(
                    pool_size=self.config.pool_size,
                    max_overflow=self.config.max_overflow,
                    pool_timeout=30,
                    pool_recycle=3600,
                )

            self._engine = create_engine(self.config.url, **engine_kwargs)

            self._session_factory = sessionmaker(
                bind=self._engine,
                expire_on_commit=False,
            )

            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))

            log_with_context(self.logger, INFO, "Database initialized successfully",
                             db_backend=self.backend_name)

        except Exception as e:
            log_with_context(self.logger, ERROR, "Failed to initialize database",
                             error=str(e),
                             exception_type=type(e).__name__)
            raise

    def create_tables(self) -> None:
        Base.metadata.create_all(self.engine)
        log_with_context(self.logger, INFO, "Database tables ensured",
                         tables=sorted(Base.metadata.tables.keys()))

    def shutdown(self) -> None:
        self.logger.info("Shutting down database connections")

        if self._engine:
            self._engine.dispose()
            self._engine = None

        self._session_factory = None
        self._repositories.clear()

        self.logger.info("Database shutdown completed")

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._engine

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        session = self._session_factory()
        try:
            log_with_context(self.logger, DEBUG, "Database session created")
            yield session
        except Exception as e:
            log_with_context(self.logger, ERROR, "Database session error, rolling back",
                             error=str(e),
                             exception_type=type(e).__name__)
            session.rollback()
            raise
        finally:
            session.close()
            log_with_context(self.logger, DEBUG, "Database session closed")

    @contextmanager
    def get_transaction(self) -> Generator[Session, None, None]:
        with self.get_session() as session:
            yield session
            session.commit()
            log_with_context(self.logger, DEBUG, "Database transaction committed")

    def health_check(self) -> bool:
        try:
            with self.get_session() as session:
                session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            log_with_context(self.logger, ERROR, "Database health check failed",
                             error=str(e),
                             exception_type=type(e).__name__)
            return False

    # === Repositories ===

    def _get_or_create_repository(self, repo_class, repo_name):
        if repo_name not in self._repositories:
            self._repositories[repo_name] = repo_class(self)
        return self._repositories[repo_name]

    def get_pool_repo(self):
        from .repositories.pool_repository import PoolRepository
        return self._get_or_create_repository(PoolRepository, 'pool')

    def get_base_pool_repo(self):
        from .repositories.pool_repository import BasePoolRepository
        return self._get_or_create_repository(BasePoolRepository, 'base_pool')

    def get_swap_repo(self):
        from .repositories.swap_repository import SwapEventRepository
        return self._get_or_create_repository(SwapEventRepository, 'swap_event')

    def get_snapshot_repo(self):
        from .repositories.snapshot_repository import SwapSnapshotRepository
        return self._get_or_create_repository(SwapSnapshotRepository, 'swap_snapshot')
