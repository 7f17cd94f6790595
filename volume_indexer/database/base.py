# volume_indexer/database/base.py

from datetime import datetime, timezone

from sqlalchemy import BigInteger, Column, DateTime, text
from sqlalchemy.orm import declarative_base

from .types import EvmHashType


Base = declarative_base()

class TimestampMixin:
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text('CURRENT_TIMESTAMP')
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text('CURRENT_TIMESTAMP'),
        onupdate=lambda: datetime.now(timezone.utc)
    )


class BlockchainTimestampMixin:
    timestamp = Column(BigInteger, nullable=False, index=True)


class DBBaseModel(Base, TimestampMixin):
    __abstract__ = True


class DBSwapEventModel(DBBaseModel, BlockchainTimestampMixin):
    __abstract__ = True

    tx_hash = Column(EvmHashType(), nullable=False, index=True)
    block_number = Column(BigInteger, nullable=False, index=True)
