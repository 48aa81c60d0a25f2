"""
Function call emission for the Ember language compiler.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from llvmlite import ir

from ember_lang.backend.expressions.casts import cast_to_spec
from ember_lang.backend.utils import require_builder
from ember_lang.internals.errors import raise_codegen_error

if TYPE_CHECKING:
    from ember_lang.backend.codegen_llvm import LLVMCodegen
    from ember_lang.backend.functions import FunctionContext
    from ember_lang.semantics.ast import CallExpr


def emit_function_call(codegen: 'LLVMCodegen', expr: 'CallExpr', ctx: 'FunctionContext') -> ir.Value:
    """Emit a call to a previously registered function.

    Arguments are evaluated left to right and each is cast to the declared
    type of its parameter.

    Args:
        codegen: The main LLVMCodegen instance.
        expr: The call expression.
        ctx: The function being generated.

    Returns:
        The call's return value.

    Raises:
        UndefinedFunction: If no function is registered under the name.
        ArgumentCountMismatch: If the argument count differs from the declaration.
    """
    symbol = codegen.memory.find_function(expr.name, expr.loc)
    if len(expr.args) != len(symbol.param_specs):
        raise_codegen_error("CE0105", span=expr.loc, name=expr.name,
                            expected=len(symbol.param_specs), got=len(expr.args))

    args = []
    for arg, spec in zip(expr.args, symbol.param_specs):
        value = codegen.expressions.emit_expr(arg, ctx)
        args.append(cast_to_spec(ctx, value, spec))

    return require_builder(ctx).call(symbol.function, args, name="calltmp")
