# volume_indexer/database/repositories/pool_repository.py

from typing import Dict, Optional

from sqlalchemy.orm import Session

from ..tables.pool import DBPool, DBBasePool
from ...core.logging import log_with_context, DEBUG, ERROR
from ...types.model.pool import BasePoolInfo, PoolInfo
from ...types.new import EvmAddress
from .base_repository import BaseRepository


class PoolRepository(BaseRepository[DBPool]):
    """Pools and their all-time cumulative volume"""

    def __init__(self, db_manager):
        super().__init__(db_manager, DBPool)

    def get_by_address(self, session: Session, address: str) -> Optional[DBPool]:
        return self.get(session, EvmAddress(address))

    def upsert(self, session: Session, info: PoolInfo) -> Dict[str, str]:
        """Create or update a pool's layout. Cumulative totals are never overwritten."""
        try:
            pool = self.get(session, info.address)
            action = "unchanged"

            if pool is None:
                pool = DBPool(
                    address=info.address,
                    cumulative_volume=info.cumulative_volume,
                    cumulative_volume_usd=info.cumulative_volume_usd,
                )
                session.add(pool)
                action = "created"
            elif not self._matches(pool, info):
                action = "updated"

            pool.name = info.name
            pool.coins = list(info.coins)
            pool.coin_decimals = list(info.coin_decimals)
            pool.pool_type = info.pool_type
            pool.asset_type = int(info.asset_type)
            pool.is_v2 = info.is_v2
            pool.base_pool = info.base_pool
            session.flush()

            log_with_context(self.logger, DEBUG, f"Pool {action}",
                             pool=info.address, pool_type=info.pool_type.value)
            return {"address": info.address, "action": action}

        except Exception as e:
            log_with_context(self.logger, ERROR, "Error upserting pool",
                             pool=info.address, error=str(e))
            raise

    @staticmethod
    def _matches(pool: DBPool, info: PoolInfo) -> bool:
        return (
            list(pool.coins) == list(info.coins)
            and list(pool.coin_decimals) == list(info.coin_decimals)
            and pool.pool_type == info.pool_type
            and pool.asset_type == int(info.asset_type)
            and pool.is_v2 == info.is_v2
            and pool.base_pool == info.base_pool
            and pool.name == info.name
        )


class BasePoolRepository(BaseRepository[DBBasePool]):
    """Base pools of metapools and the virtual pools behind lending wrappers"""

    def __init__(self, db_manager):
        super().__init__(db_manager, DBBasePool)

    def get_by_address(self, session: Session, address: str, is_virtual: bool = False) -> Optional[DBBasePool]:
        return self.get(session, (EvmAddress(address), is_virtual))

    def upsert(self, session: Session, info: BasePoolInfo) -> Dict[str, str]:
        try:
            base_pool = self.get(session, (info.address, info.is_virtual))
            action = "unchanged"

            if base_pool is None:
                base_pool = DBBasePool(address=info.address, is_virtual=info.is_virtual)
                session.add(base_pool)
                action = "created"
            elif (list(base_pool.coins) != list(info.coins)
                  or list(base_pool.coin_decimals) != list(info.coin_decimals)):
                action = "updated"

            base_pool.coins = list(info.coins)
            base_pool.coin_decimals = list(info.coin_decimals)
            session.flush()

            log_with_context(self.logger, DEBUG, f"Base pool {action}",
                             pool=info.address, is_virtual=info.is_virtual)
            return {"address": info.address, "action": action}

        except Exception as e:
            log_with_context(self.logger, ERROR, "Error upserting base pool",
                             pool=info.address, error=str(e))
            raise

    def lookup(self, session: Session, is_virtual: bool = False) -> "SessionPoolLookup":
        return SessionPoolLookup(self, session, is_virtual)


class SessionPoolLookup:
    """PoolLookup over the base_pools table within one session"""

    def __init__(self, repository: BasePoolRepository, session: Session, is_virtual: bool):
        self.repository = repository
        self.session = session
        self.is_virtual = is_virtual
        self._cache: Dict[str, Optional[BasePoolInfo]] = {}

    def get(self, address: str) -> Optional[BasePoolInfo]:
        if address not in self._cache:
            record = self.repository.get_by_address(self.session, address, self.is_virtual)
            self._cache[address] = record.to_info() if record else None
        return self._cache[address]
