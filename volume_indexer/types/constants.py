# volume_indexer/types/constants.py

from decimal import Context, Decimal

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Wide enough to divide any uint256 by a power of ten without rounding
AMOUNT_PRECISION = 80
AMOUNT_CONTEXT = Context(prec=AMOUNT_PRECISION)

# Decimals forced on the sold leg of affected factory metapool swaps
METAPOOL_DX_DECIMALS = 18

DECIMAL_TWO = Decimal(2)
