# volume_indexer/database/tables/__init__.py

from .pool import DBPool, DBBasePool
from .swap import DBSwapEvent
from .snapshot import DBSwapSnapshot

__all__ = [
    "DBPool",
    "DBBasePool",
    "DBSwapEvent",
    "DBSwapSnapshot",
]
