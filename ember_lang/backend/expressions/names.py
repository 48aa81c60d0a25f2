"""
Variable reference and assignment emission.

Both resolve the name through the scope chain. Assignment casts the value to
the target slot's declared width/signedness, not to the value's own width,
and yields the stored value.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from llvmlite import ir

from ember_lang.backend.expressions.casts import cast_to_spec
from ember_lang.backend.utils import require_builder

if TYPE_CHECKING:
    from ember_lang.backend.codegen_llvm import LLVMCodegen
    from ember_lang.backend.functions import FunctionContext
    from ember_lang.semantics.ast import VarExpr, AssignExpr


def emit_var(codegen: 'LLVMCodegen', expr: 'VarExpr', ctx: 'FunctionContext') -> ir.Value:
    """Load the current value of a variable.

    Raises:
        UndefinedSymbol: If the name does not resolve to a local slot.
    """
    slot = codegen.memory.find_local_slot(expr.name, ctx, expr.loc)
    return require_builder(ctx).load(slot.ptr, name=expr.name)


def emit_assign(codegen: 'LLVMCodegen', expr: 'AssignExpr', ctx: 'FunctionContext') -> ir.Value:
    """Evaluate, cast to the slot's declared type, store, and yield the stored value.

    The right-hand side is evaluated before the target is resolved.
    """
    value = codegen.expressions.emit_expr(expr.value, ctx)
    slot = codegen.memory.find_local_slot(expr.name, ctx, expr.loc)
    stored = cast_to_spec(ctx, value, slot.spec)
    require_builder(ctx).store(stored, slot.ptr)
    return stored
