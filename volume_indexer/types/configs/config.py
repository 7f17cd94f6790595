# volume_indexer/types/configs/config.py

from decimal import Decimal
from typing import Dict, Optional, List

from msgspec import Struct, field


class DatabaseConfig(Struct):
    url: str
    pool_size: int = 5
    max_overflow: int = 10
    echo: bool = False

class LoggingConfig(Struct):
    level: str = "INFO"
    log_dir: Optional[str] = None
    console: bool = True
    file: bool = False
    structured: bool = True

class ProcessingConfig(Struct):
    rebasing_factory_metapools: List[str] = []
    legacy_swap_ids: bool = False

class PricingConfig(Struct):
    default_price: Decimal = Decimal(0)
    prices: Dict[str, Decimal] = {}

class IndexerConfig(Struct):
    database: DatabaseConfig
    name: str = "volume_indexer"
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
