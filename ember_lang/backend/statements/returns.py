"""
Return statement emission for the Ember language compiler.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from ember_lang.backend.expressions.casts import cast_to_spec
from ember_lang.backend.utils import require_builder

if TYPE_CHECKING:
    from ember_lang.backend.codegen_llvm import LLVMCodegen
    from ember_lang.backend.functions import FunctionContext
    from ember_lang.semantics.ast import ReturnStatement


def emit_return(codegen: 'LLVMCodegen', stmt: 'ReturnStatement', ctx: 'FunctionContext') -> None:
    """Emit `ret` with the value cast to the function's declared return type.

    No scope-exit code runs; locals need no cleanup.
    """
    value = codegen.expressions.emit_expr(stmt.expr, ctx)
    require_builder(ctx).ret(cast_to_spec(ctx, value, ctx.return_spec))
