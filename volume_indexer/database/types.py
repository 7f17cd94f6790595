# volume_indexer/database/types.py

from decimal import Decimal
from typing import Optional
import enum

from sqlalchemy import String, Text
from sqlalchemy.types import TypeDecorator


class EvmAddressType(TypeDecorator):
    impl = String(42)
    cache_ok = True

    def process_bind_param(self, value: Optional[str], dialect) -> Optional[str]:
        return str(value).lower() if value else None

    def process_result_value(self, value: Optional[str], dialect) -> Optional[str]:
        return value if value else None


class EvmHashType(TypeDecorator):
    impl = String(66)
    cache_ok = True

    def process_bind_param(self, value: Optional[str], dialect) -> Optional[str]:
        return str(value).lower() if value else None

    def process_result_value(self, value: Optional[str], dialect) -> Optional[str]:
        return value if value else None


class DecimalStringType(TypeDecorator):
    """Exact decimal storage independent of backend NUMERIC support"""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect) -> Optional[str]:
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value: Optional[str], dialect) -> Optional[Decimal]:
        return Decimal(value) if value is not None else None


class SnapshotPeriod(enum.Enum):
    HOUR = "1hr"
    DAY = "1day"
    WEEK = "1week"

    def seconds(self) -> int:
        """Get the duration of this period type in seconds"""
        durations = {
            SnapshotPeriod.HOUR: 3600,
            SnapshotPeriod.DAY: 86400,
            SnapshotPeriod.WEEK: 604800,
        }
        return durations[self]

    def bucket(self, timestamp: int) -> int:
        return timestamp // self.seconds()

    def bucket_start(self, timestamp: int) -> int:
        return self.bucket(timestamp) * self.seconds()

    @classmethod
    def from_name(cls, name: str) -> "SnapshotPeriod":
        aliases = {
            "hour": cls.HOUR, "hourly": cls.HOUR,
            "day": cls.DAY, "daily": cls.DAY,
            "week": cls.WEEK, "weekly": cls.WEEK,
        }
        key = name.strip().lower()
        if key in aliases:
            return aliases[key]
        return cls(key)


class UintStringType(TypeDecorator):
    """Unbounded unsigned integers (uint256 token amounts)"""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect) -> Optional[str]:
        return str(int(value)) if value is not None else None

    def process_result_value(self, value: Optional[str], dialect) -> Optional[int]:
        return int(value) if value is not None else None
