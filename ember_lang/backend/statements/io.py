"""
I/O statement emission for the Ember language compiler.

Printing delegates to the runtime's printf declaration; no formatting is
done in generated code.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ember_lang.backend.codegen_llvm import LLVMCodegen
    from ember_lang.backend.functions import FunctionContext
    from ember_lang.semantics.ast import PrintStatement


def emit_print(codegen: 'LLVMCodegen', stmt: 'PrintStatement', ctx: 'FunctionContext') -> None:
    """Evaluate the expression and print it followed by a newline."""
    val = codegen.expressions.emit_expr(stmt.expr, ctx)
    codegen.runtime.formatting.emit_print_value(ctx, val)
