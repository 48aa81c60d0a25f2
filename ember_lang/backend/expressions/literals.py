"""
Literal expression emission for the Ember language compiler.

Integer literals are materialized as 64-bit signed constants regardless of
their magnitude; booleans are i1 constants.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from llvmlite import ir

from ember_lang.backend.constants import BOOL_BIT_WIDTH, LITERAL_BIT_WIDTH
from ember_lang.backend.expressions.casts import wrap_to_width

if TYPE_CHECKING:
    from ember_lang.semantics.ast import IntLiteral, BoolLiteral


def emit_int_literal(expr: 'IntLiteral') -> ir.Constant:
    return ir.Constant(ir.IntType(LITERAL_BIT_WIDTH), wrap_to_width(expr.value, LITERAL_BIT_WIDTH))


def emit_bool_literal(expr: 'BoolLiteral') -> ir.Constant:
    return ir.Constant(ir.IntType(BOOL_BIT_WIDTH), int(expr.value))
