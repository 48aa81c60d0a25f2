"""
Integer casts and the width promotion rule.

Two kinds of conversion exist:
- promotion, applied to the operands of a binary operator: the narrower
  operand is sign-extended to the wider operand's width, never truncated;
- declared casts, applied when a value is stored into a typed location,
  passed as an argument, or returned: the value is extended (sext for signed
  targets, zext for unsigned ones) or truncated to the declared width.

Both fold at generation time when the value is a constant.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from llvmlite import ir

from ember_lang.backend.constants import BOOL_BIT_WIDTH
from ember_lang.backend.llvm_types import IntSpec
from ember_lang.backend.utils import require_builder
from ember_lang.internals.errors import raise_internal_error

if TYPE_CHECKING:
    from ember_lang.backend.functions import FunctionContext


def wrap_to_width(value: int, width: int) -> int:
    """Reduce `value` modulo 2**width in two's-complement (i1 stays 0/1)."""
    value &= (1 << width) - 1
    if width > BOOL_BIT_WIDTH and value >= (1 << (width - 1)):
        value -= (1 << width)
    return value


def constant_value(c: ir.Constant) -> int:
    return int(c.constant)


def _require_int(v: ir.Value) -> ir.IntType:
    if not isinstance(v.type, ir.IntType):
        raise_internal_error("CE0015", message=f"expected integer value, got {v.type}")
    return v.type


def sign_extend(ctx: 'FunctionContext', v: ir.Value, target: ir.IntType) -> ir.Value:
    """Sign-extend `v` to `target`; a no-op when widths already match."""
    src = _require_int(v)
    if src.width == target.width:
        return v
    if src.width > target.width:
        raise_internal_error("CE0015", message=f"sign extension would truncate {src} to {target}")
    if isinstance(v, ir.Constant):
        return ir.Constant(target, wrap_to_width(_as_signed(constant_value(v), src.width), target.width))
    return require_builder(ctx).sext(v, target)


def promote(ctx: 'FunctionContext', left: ir.Value, right: ir.Value) -> tuple[ir.Value, ir.Value]:
    """Apply the promotion rule to a pair of operands.

    The narrower operand is sign-extended to the wider width; equal widths
    pass through untouched.
    """
    lw = _require_int(left).width
    rw = _require_int(right).width
    if lw > rw:
        right = sign_extend(ctx, right, left.type)
    elif rw > lw:
        left = sign_extend(ctx, left, right.type)
    return left, right


def cast_to_spec(ctx: 'FunctionContext', v: ir.Value, spec: IntSpec) -> ir.Value:
    """Cast `v` to a declared width/signedness.

    Booleans (i1) always zero-extend so that true stores as 1.
    """
    src = _require_int(v)
    target = ir.IntType(spec.bit_width)
    if src.width == target.width:
        return v

    widening = src.width < target.width
    use_sext = widening and spec.signed and src.width != BOOL_BIT_WIDTH

    if isinstance(v, ir.Constant):
        raw = constant_value(v)
        if use_sext:
            raw = _as_signed(raw, src.width)
        elif widening:
            raw &= (1 << src.width) - 1
        return ir.Constant(target, wrap_to_width(raw, target.width))

    builder = require_builder(ctx)
    if not widening:
        return builder.trunc(v, target)
    if use_sext:
        return builder.sext(v, target)
    return builder.zext(v, target)


def as_i1(ctx: 'FunctionContext', v: ir.Value) -> ir.Value:
    """Convert a condition value to i1 by comparing against zero."""
    ty = _require_int(v)
    if ty.width == BOOL_BIT_WIDTH:
        return v
    i1 = ir.IntType(BOOL_BIT_WIDTH)
    if isinstance(v, ir.Constant):
        return ir.Constant(i1, int(constant_value(v) != 0))
    return require_builder(ctx).icmp_unsigned('!=', v, ir.Constant(ty, 0))


def _as_signed(value: int, width: int) -> int:
    # i1 constants hold 0/1; read them as -1/0 for sign extension
    if width == BOOL_BIT_WIDTH:
        return -1 if value & 1 else 0
    return wrap_to_width(value, width)
