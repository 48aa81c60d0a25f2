"""Backend constants package."""
from ember_lang.backend.constants.bit_widths import (
    BOOL_BIT_WIDTH,
    INT8_BIT_WIDTH,
    INT16_BIT_WIDTH,
    INT32_BIT_WIDTH,
    INT64_BIT_WIDTH,
)

# Canonical width of integer literals
LITERAL_BIT_WIDTH = INT64_BIT_WIDTH

# printf template used by print statements (value is widened to 64 bits)
PRINT_INT_FORMAT = "%lld\n"

__all__ = [
    'BOOL_BIT_WIDTH',
    'INT8_BIT_WIDTH',
    'INT16_BIT_WIDTH',
    'INT32_BIT_WIDTH',
    'INT64_BIT_WIDTH',
    'LITERAL_BIT_WIDTH',
    'PRINT_INT_FORMAT',
]
