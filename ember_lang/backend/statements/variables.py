"""
Variable declaration emission for the Ember language compiler.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from ember_lang.backend.expressions.casts import cast_to_spec
from ember_lang.backend.llvm_types import width_of

if TYPE_CHECKING:
    from ember_lang.backend.codegen_llvm import LLVMCodegen
    from ember_lang.backend.functions import FunctionContext
    from ember_lang.semantics.ast import LetStatement


def emit_let(codegen: 'LLVMCodegen', stmt: 'LetStatement', ctx: 'FunctionContext') -> None:
    """Emit variable declaration with initialization.

    The declared type is resolved before the initializer is evaluated, so an
    unknown tag fails without emitting anything. The initializer is cast to the
    declared type and stored into a fresh slot bound in the current frame. The
    name is bound after the initializer runs, so `let x: i32 = x;` reads an
    outer `x`.

    Raises:
        UnknownType: If the annotation is not an integer type tag.
    """
    spec = width_of(stmt.type, stmt.loc)
    value = codegen.expressions.emit_expr(stmt.expr, ctx)
    casted = cast_to_spec(ctx, value, spec)
    codegen.memory.create_local(ctx, stmt.name, spec, casted)
