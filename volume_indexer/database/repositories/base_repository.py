# volume_indexer/database/repositories/base_repository.py

from typing import TypeVar, Generic, Type, Optional, Any

from sqlalchemy.orm import Session

from ...core.logging import IndexerLogger, log_with_context, ERROR


T = TypeVar('T')

class BaseRepository(Generic[T]):
    def __init__(self, db_manager, model_class: Type[T]):
        self.db_manager = db_manager
        self.model_class = model_class
        self.logger = IndexerLogger.get_logger(f'database.repository.{model_class.__name__.lower()}')

    def get(self, session: Session, key: Any) -> Optional[T]:
        try:
            return session.get(self.model_class, key)
        except Exception as e:
            log_with_context(self.logger, ERROR, f"Error getting {self.model_class.__name__}",
                             key=str(key), error=str(e))
            raise

    def count(self, session: Session) -> int:
        try:
            return session.query(self.model_class).count()
        except Exception as e:
            log_with_context(self.logger, ERROR, f"Error counting {self.model_class.__name__}",
                             error=str(e))
            raise
