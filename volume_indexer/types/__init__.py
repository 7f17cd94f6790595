# volume_indexer/types/__init__.py

from .constants import ZERO_ADDRESS, AMOUNT_PRECISION, METAPOOL_DX_DECIMALS

# New Types
from .new import (
    EvmAddress,
    EvmHash,
    SwapEventId,
    ErrorId,
)

# Configuration Types
from .configs.config import (
    DatabaseConfig,
    LoggingConfig,
    ProcessingConfig,
    PricingConfig,
    IndexerConfig,
)
from .configs.pool import RegistryConfig

# Model Types
from .model.pool import PoolType, AssetType, PoolInfo, BasePoolInfo
from .model.events import ExchangeEvent
from .model.swap import SwapRecord, ResolvedTokens
from .model.errors import (
    ProcessingError,
    SwapResolutionError,
    PoolNotFoundError,
    IndexOutOfRangeError,
    UndefinedTokenError,
)

__all__ = [
    "ZERO_ADDRESS",
    "AMOUNT_PRECISION",
    "METAPOOL_DX_DECIMALS",
    "EvmAddress",
    "EvmHash",
    "SwapEventId",
    "ErrorId",
    "DatabaseConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "PricingConfig",
    "IndexerConfig",
    "RegistryConfig",
    "PoolType",
    "AssetType",
    "PoolInfo",
    "BasePoolInfo",
    "ExchangeEvent",
    "SwapRecord",
    "ResolvedTokens",
    "ProcessingError",
    "SwapResolutionError",
    "PoolNotFoundError",
    "IndexOutOfRangeError",
    "UndefinedTokenError",
]
