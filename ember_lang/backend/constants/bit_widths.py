"""LLVM integer type bit widths.

This module provides centralized constants for LLVM IR integer type bit widths.
Used with ir.IntType(width) throughout the backend.
"""

# Integer type bit widths
BOOL_BIT_WIDTH = 1      # i1 type (comparison results, branch conditions)
INT8_BIT_WIDTH = 8      # i8 type (bytes, C strings)
INT16_BIT_WIDTH = 16    # i16 type
INT32_BIT_WIDTH = 32    # i32 type (printf result, entry function exit code)
INT64_BIT_WIDTH = 64    # i64 type (integer literals, print argument)
