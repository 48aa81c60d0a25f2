"""
Operator expression emission for the Ember language compiler.

This module handles binary arithmetic (+ - * /, signed division) and
relational (== != < <= > >=) operators. Operands of different widths are
promoted by sign-extending the narrower one before the operator is applied.
Operations on two constants are folded at compile time.
"""
from __future__ import annotations
from typing import Optional, TYPE_CHECKING

from llvmlite import ir

from ember_lang.backend.constants import BOOL_BIT_WIDTH
from ember_lang.backend.expressions.casts import constant_value, promote, wrap_to_width
from ember_lang.backend.utils import require_builder
from ember_lang.internals.errors import raise_codegen_error

if TYPE_CHECKING:
    from ember_lang.backend.codegen_llvm import LLVMCodegen
    from ember_lang.backend.functions import FunctionContext
    from ember_lang.semantics.ast import BinaryExpr


ARITHMETIC_OPS = ("+", "-", "*", "/")
COMPARISON_OPS = ("==", "!=", "<", "<=", ">", ">=")

# Names given to the instructions, kept readable in the IR dump
_TMP_NAMES = {
    "+": "addtmp", "-": "subtmp", "*": "multmp", "/": "divtmp",
    "==": "eqtmp", "!=": "netmp", "<": "lttmp", "<=": "letmp", ">": "gttmp", ">=": "getmp",
}


def emit_binary_op(codegen: 'LLVMCodegen', expr: 'BinaryExpr', ctx: 'FunctionContext') -> ir.Value:
    """Emit binary operation with width promotion.

    Both operands are evaluated left then right before the operator is checked,
    matching the evaluation order of the rest of the generator.

    Raises:
        UnsupportedOperator: If the operator is outside the fixed operator set.
    """
    left = codegen.expressions.emit_expr(expr.left, ctx)
    right = codegen.expressions.emit_expr(expr.right, ctx)

    op = expr.op
    if op not in ARITHMETIC_OPS and op not in COMPARISON_OPS:
        raise_codegen_error("CE0104", span=expr.loc, op=op)

    left, right = promote(ctx, left, right)

    if op in COMPARISON_OPS:
        return emit_comparison(ctx, op, left, right)
    return emit_arithmetic(ctx, op, left, right)


def emit_comparison(ctx: 'FunctionContext', op: str, left: ir.Value, right: ir.Value) -> ir.Value:
    """Emit a signed integer comparison producing i1."""
    if isinstance(left, ir.Constant) and isinstance(right, ir.Constant):
        return _fold_comparison_constants(op, left, right)
    return require_builder(ctx).icmp_signed(op, left, right, name=_TMP_NAMES[op])


def emit_arithmetic(ctx: 'FunctionContext', op: str, left: ir.Value, right: ir.Value) -> ir.Value:
    """Emit integer arithmetic on operands of equal width.

    Performs compile-time constant folding when both operands are constants.
    """
    if isinstance(left, ir.Constant) and isinstance(right, ir.Constant):
        folded = _fold_arithmetic_constants(op, left, right)
        if folded is not None:
            return folded

    builder = require_builder(ctx)
    int_ops = {
        "+": builder.add,
        "-": builder.sub,
        "*": builder.mul,
        "/": builder.sdiv,
    }
    return int_ops[op](left, right, name=_TMP_NAMES[op])


def _signed(c: ir.Constant) -> int:
    width = c.type.width
    value = constant_value(c)
    if width == BOOL_BIT_WIDTH:
        return -1 if value & 1 else 0
    return wrap_to_width(value, width)


def _fold_arithmetic_constants(op: str, left: ir.Constant, right: ir.Constant) -> Optional[ir.Constant]:
    """Fold arithmetic on two constants, wrapping to the operand width.

    Division by a zero constant is left to the emitted instruction.
    """
    lval = _signed(left)
    rval = _signed(right)

    if op == "+":
        result = lval + rval
    elif op == "-":
        result = lval - rval
    elif op == "*":
        result = lval * rval
    elif op == "/":
        if rval == 0:
            return None
        # sdiv truncates toward zero
        quotient = abs(lval) // abs(rval)
        result = quotient if (lval < 0) == (rval < 0) else -quotient
    else:
        return None

    return ir.Constant(left.type, wrap_to_width(result, left.type.width))


def _fold_comparison_constants(op: str, left: ir.Constant, right: ir.Constant) -> ir.Constant:
    lval = _signed(left)
    rval = _signed(right)
    outcome = {
        "==": lval == rval,
        "!=": lval != rval,
        "<": lval < rval,
        "<=": lval <= rval,
        ">": lval > rval,
        ">=": lval >= rval,
    }[op]
    return ir.Constant(ir.IntType(BOOL_BIT_WIDTH), int(outcome))
