"""
Statement emission module for the Ember language compiler.

Main entry point: StatementEmitter.emit_stmt()
"""
from __future__ import annotations
from typing import Iterable, TYPE_CHECKING

from ember_lang.semantics.ast import (
    Stmt, ExpressionStatement, PrintStatement, LetStatement, BlockStatement,
    IfStatement, FnStatement, ReturnStatement, WhileStatement,
)
from ember_lang.backend.statements import control_flow, io, returns, variables
from ember_lang.backend.utils import is_terminated, require_builder
from ember_lang.internals.errors import raise_internal_error

if TYPE_CHECKING:
    from ember_lang.backend.codegen_llvm import LLVMCodegen
    from ember_lang.backend.functions import FunctionContext


class StatementEmitter:
    """Main statement emitter that delegates to specialized submodules."""

    def __init__(self, codegen: 'LLVMCodegen') -> None:
        """Initialize statement emitter with reference to main codegen instance.

        Args:
            codegen: The main LLVMCodegen instance providing the module and scopes.
        """
        self.codegen = codegen

    def emit_stmt(self, stmt: Stmt, ctx: 'FunctionContext') -> None:
        """Emit LLVM IR for a statement.

        Args:
            stmt: The statement AST node to emit.
            ctx: The function whose current block receives the instructions.
        """
        require_builder(ctx)

        match stmt:
            case ExpressionStatement():
                # Value is discarded
                self.codegen.expressions.emit_expr(stmt.expr, ctx)
            case PrintStatement():
                io.emit_print(self.codegen, stmt, ctx)
            case LetStatement():
                variables.emit_let(self.codegen, stmt, ctx)
            case BlockStatement():
                control_flow.emit_block(self.codegen, stmt, ctx)
            case IfStatement():
                control_flow.emit_if(self.codegen, stmt, ctx)
            case WhileStatement():
                control_flow.emit_while(self.codegen, stmt, ctx)
            case FnStatement():
                self.codegen.functions.emit_func_def(stmt)
            case ReturnStatement():
                returns.emit_return(self.codegen, stmt, ctx)
            case _:
                raise_internal_error("CE0015", message=f"unknown statement node {type(stmt).__name__}")

    def emit_statements(self, statements: Iterable[Stmt], ctx: 'FunctionContext') -> None:
        """Emit statements in order, skipping code once the current block is terminated.

        Anything after a `return` in the same block is unreachable and is not
        emitted. Function definitions are still generated since they do not
        add instructions to the current block.
        """
        for stmt in statements:
            if is_terminated(ctx) and not isinstance(stmt, FnStatement):
                continue
            self.emit_stmt(stmt, ctx)


__all__ = ['StatementEmitter']
