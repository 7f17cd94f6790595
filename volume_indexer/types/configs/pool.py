# volume_indexer/types/configs/pool.py

from typing import List
from msgspec import Struct

from ..model.pool import BasePoolInfo, PoolInfo


class RegistryConfig(Struct):
    """Pool registry file: pools plus the base/virtual pools they reference"""
    pools: List[PoolInfo] = []
    base_pools: List[BasePoolInfo] = []
