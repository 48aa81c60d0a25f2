"""Backend utilities package.

- validation: Common precondition checks (builder, function, open block)
"""

from .validation import (
    is_terminated,
    require_both_initialized,
    require_builder,
    require_function,
)

__all__ = [
    'is_terminated',
    'require_builder',
    'require_function',
    'require_both_initialized',
]
