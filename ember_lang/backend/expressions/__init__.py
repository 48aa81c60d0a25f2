"""
Expression emission module for the Ember language compiler.

The expression variants form a closed set; ExpressionEmitter.emit_expr()
dispatches on it with a match statement and delegates to one submodule per
category.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from ember_lang.semantics.ast import (
    Expr, IntLiteral, BoolLiteral, BinaryExpr, VarExpr, AssignExpr, CallExpr,
)
from ember_lang.backend.expressions import calls, literals, names, operators
from ember_lang.backend.utils import require_builder
from ember_lang.internals.errors import raise_internal_error

if TYPE_CHECKING:
    from llvmlite import ir
    from ember_lang.backend.codegen_llvm import LLVMCodegen
    from ember_lang.backend.functions import FunctionContext


class ExpressionEmitter:
    """Main expression emitter that delegates to specialized submodules."""

    def __init__(self, codegen: 'LLVMCodegen') -> None:
        """Initialize expression emitter with reference to main codegen instance.

        Args:
            codegen: The main LLVMCodegen instance providing the module and scopes.
        """
        self.codegen = codegen

    def emit_expr(self, expr: Expr, ctx: 'FunctionContext') -> 'ir.Value':
        """Emit LLVM IR for an expression and return its SSA value.

        Args:
            expr: The expression AST node to emit.
            ctx: The function whose current block receives the instructions.

        Returns:
            The LLVM value representing the expression result.
        """
        require_builder(ctx)

        match expr:
            case IntLiteral():
                return literals.emit_int_literal(expr)
            case BoolLiteral():
                return literals.emit_bool_literal(expr)
            case BinaryExpr():
                return operators.emit_binary_op(self.codegen, expr, ctx)
            case VarExpr():
                return names.emit_var(self.codegen, expr, ctx)
            case AssignExpr():
                return names.emit_assign(self.codegen, expr, ctx)
            case CallExpr():
                return calls.emit_function_call(self.codegen, expr, ctx)
            case _:
                raise_internal_error("CE0015", message=f"unknown expression node {type(expr).__name__}")


__all__ = ['ExpressionEmitter']
