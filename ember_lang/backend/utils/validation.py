"""Validation utilities for common checks in code generation.

All validation functions raise InternalCompilerError on failure, making them
suitable for precondition checks at the top of emission functions.

Common Usage:
    builder = require_builder(ctx)      # Validates and returns builder
    func = require_function(ctx)        # Validates and returns function
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from llvmlite import ir

from ember_lang.internals.errors import raise_internal_error

if TYPE_CHECKING:
    from ember_lang.backend.functions import FunctionContext


def require_builder(ctx: Optional['FunctionContext']) -> ir.IRBuilder:
    """Validate the context has an IR builder or raise CE0009."""
    if ctx is None or ctx.builder is None:
        raise_internal_error("CE0009")
    return ctx.builder


def require_function(ctx: Optional['FunctionContext']) -> ir.Function:
    """Validate the context names a function or raise CE0010."""
    if ctx is None or ctx.function is None:
        raise_internal_error("CE0010")
    return ctx.function


def require_both_initialized(ctx: Optional['FunctionContext']) -> tuple[ir.IRBuilder, ir.Function]:
    """Validate both builder and function are initialized.

    Example:
        >>> builder, func = require_both_initialized(ctx)
        >>> block = func.append_basic_block('then')
    """
    builder = require_builder(ctx)
    func = require_function(ctx)
    return builder, func


def is_terminated(ctx: 'FunctionContext') -> bool:
    """True when the builder's current block already ends in a terminator."""
    return require_builder(ctx).block.is_terminated
