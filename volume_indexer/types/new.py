# volume_indexer/types/new.py

from eth_utils import is_hex, is_hex_address, to_normalized_address


class EvmAddress(str):
    """Lower-cased 20-byte hex address"""

    def __new__(cls, value: str) -> "EvmAddress":
        if not is_hex_address(value):
            raise ValueError(f"Invalid EVM address: {value}")
        return super().__new__(cls, to_normalized_address(value))


class EvmHash(str):
    """Lower-cased 32-byte hex hash"""

    def __new__(cls, value: str) -> "EvmHash":
        value = value.lower()
        if not value.startswith('0x'):
            value = f'0x{value}'
        if len(value) != 66 or not is_hex(value):
            raise ValueError(f"Invalid EVM hash: {value}")
        return super().__new__(cls, value)


class SwapEventId(str):
    pass


class ErrorId(str):
    pass
