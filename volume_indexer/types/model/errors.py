# volume_indexer/types/model/errors.py

from typing import Optional, Dict, Any
import hashlib
import msgspec
from msgspec import Struct

from ..new import ErrorId


class ProcessingError(Struct):
    stage: str  # "load", "resolve", "transform", "storage"
    error_type: str  # "pool_not_found", "index_out_of_range", "undefined_token"
    message: str
    error_id: Optional[str] = None
    context: Optional[Dict[str, Any]] = None  # tx_hash, pool, log_index, etc.

    def __post_init__(self) -> None:
        if not self.error_id:
            self.error_id = self.generate_error_id()

    def generate_error_id(self) -> ErrorId:
        content_struct = {
            "stage": self.stage,
            "error_type": self.error_type,
            "message": self.message,
            "context": self.context or {},
        }
        content_bytes = msgspec.msgpack.encode(content_struct)
        hash_hex = hashlib.sha256(content_bytes).hexdigest()

        return ErrorId(hash_hex[:12])


class SwapResolutionError(Exception):
    """Aborts processing of a single exchange event"""
    error_type = "resolution_failed"
    stage = "transform"

    def __init__(self, message: str, pool: Optional[str] = None,
                 tx_hash: Optional[str] = None, **context):
        super().__init__(message)
        self.message = message
        self.pool = pool
        self.tx_hash = tx_hash
        self.context = context

    def to_processing_error(self) -> ProcessingError:
        context = {}
        if self.pool:
            context["pool"] = str(self.pool)
        if self.tx_hash:
            context["tx_hash"] = str(self.tx_hash)
        context.update({k: v for k, v in self.context.items() if v is not None})

        return ProcessingError(
            stage=self.stage,
            error_type=self.error_type,
            message=self.message,
            context=context if context else None
        )


class PoolNotFoundError(SwapResolutionError):
    error_type = "pool_not_found"
    stage = "load"

    def __init__(self, address: str, tx_hash: Optional[str] = None, role: str = "pool"):
        super().__init__(
            f"No {role.replace('_', ' ')} registered at {address}",
            pool=address, tx_hash=tx_hash, role=role
        )
        self.role = role


class IndexOutOfRangeError(SwapResolutionError):
    error_type = "index_out_of_range"

    def __init__(self, pool: str, index: int, side: str, tx_hash: Optional[str] = None,
                 coin_count: Optional[int] = None, underlying: bool = False):
        kind = "underlying " if underlying else ""
        super().__init__(
            f"Undefined {kind}{side} id {index} for pool {pool}",
            pool=pool, tx_hash=tx_hash, index=index, side=side, coin_count=coin_count
        )
        self.index = index
        self.side = side


class UndefinedTokenError(SwapResolutionError):
    error_type = "undefined_token"

    def __init__(self, pool: str, side: str, tx_hash: Optional[str] = None):
        super().__init__(
            f"Undefined {side.upper()} token for pool {pool}",
            pool=pool, tx_hash=tx_hash, side=side
        )
        self.side = side
