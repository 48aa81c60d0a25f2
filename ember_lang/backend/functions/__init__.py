"""
Function assembly for LLVM code generation.

This module builds function signatures from declared type tags, binds
parameters to local slots, and wraps top-level statements in the entry
function.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from llvmlite import ir

from ember_lang.backend.constants import INT32_BIT_WIDTH
from ember_lang.backend.functions.context import FunctionContext
from ember_lang.backend.llvm_types import IntSpec, width_of
from ember_lang.backend.memory import FunctionSymbol
from ember_lang.semantics.ast import FnStatement, Program

if TYPE_CHECKING:
    from ember_lang.backend.codegen_llvm import LLVMCodegen


ENTRY_RETURN_SPEC = IntSpec(INT32_BIT_WIDTH, True)


class LLVMFunctionManager:
    """Creates LLVM functions and their generation contexts."""

    def __init__(self, codegen: 'LLVMCodegen') -> None:
        """Initialize function manager with reference to main codegen instance.

        Args:
            codegen: The main LLVMCodegen instance.
        """
        self.codegen = codegen

    def begin_function(self, llvm_fn: ir.Function, return_spec: IntSpec) -> FunctionContext:
        """Create the entry and start blocks and a context positioned in start.

        Allocas go into the entry block ahead of its branch to start, so they
        never interleave with the instructions of the body.
        """
        entry = llvm_fn.append_basic_block(name="entry")
        start = llvm_fn.append_basic_block(name="start")

        alloca_builder = ir.IRBuilder(entry)
        entry_branch = alloca_builder.branch(start)

        return FunctionContext(
            function=llvm_fn,
            builder=ir.IRBuilder(start),
            alloca_builder=alloca_builder,
            entry_block=entry,
            entry_branch=entry_branch,
            return_spec=return_spec,
        )

    def emit_entry_function(self, program: Program) -> ir.Function:
        """Emit all top-level statements into the entry function.

        Top-level statements run in the root scope frame. The entry function
        returns 0 once its statements fall through.
        """
        fn_ty = ir.FunctionType(ir.IntType(ENTRY_RETURN_SPEC.bit_width), [])
        llvm_fn = ir.Function(self.codegen.module, fn_ty, name=self._symbol_name(self.codegen.entry_name))
        ctx = self.begin_function(llvm_fn, ENTRY_RETURN_SPEC)

        self.codegen.statements.emit_statements(program.statements, ctx)

        if not ctx.builder.block.is_terminated:
            ctx.builder.ret(ir.Constant(fn_ty.return_type, 0))
        return llvm_fn

    def emit_func_def(self, fn: FnStatement) -> ir.Function:
        """Define a function from its declaration and body.

        The function is bound in the enclosing scope before its body is
        generated, so the body can call it recursively. Parameters are
        copied into local slots so the body may reassign them.

        A body that can fall off its end without returning leaves the last
        block unterminated; module verification reports it.

        Raises:
            UnknownType: If a parameter or return annotation is unknown.
        """
        param_specs = tuple(width_of(p.type, p.loc) for p in fn.params)
        return_spec = width_of(fn.return_type, fn.loc)

        fn_ty = ir.FunctionType(
            ir.IntType(return_spec.bit_width),
            [ir.IntType(spec.bit_width) for spec in param_specs],
        )
        llvm_fn = ir.Function(self.codegen.module, fn_ty, name=self._symbol_name(fn.name))
        self.codegen.memory.define(
            fn.name, FunctionSymbol(fn.name, llvm_fn, param_specs, return_spec)
        )

        ctx = self.begin_function(llvm_fn, return_spec)
        with self.codegen.memory.scope():
            for param, spec, arg in zip(fn.params, param_specs, llvm_fn.args):
                arg.name = param.name
                self.codegen.memory.create_local(ctx, param.name, spec, arg)
            self.codegen.statements.emit_stmt(fn.body, ctx)

        return llvm_fn

    def _symbol_name(self, name: str) -> str:
        # Nested functions may reuse a name already taken in the module
        if name in self.codegen.module.globals:
            return self.codegen.module.get_unique_name(name)
        return name


__all__ = ['ENTRY_RETURN_SPEC', 'FunctionContext', 'LLVMFunctionManager']
