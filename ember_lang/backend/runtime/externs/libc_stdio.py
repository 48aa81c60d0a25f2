"""
External declarations for C standard library I/O functions.

Only printf is needed: int printf(const char* format, ...)
"""
from __future__ import annotations

import typing

from llvmlite import ir

if typing.TYPE_CHECKING:
    from ember_lang.backend.codegen_llvm import LLVMCodegen


class LibCStdio:
    """Manages external declarations for C stdio functions."""

    def __init__(self, codegen: LLVMCodegen) -> None:
        self.codegen = codegen
        self.printf: ir.Function | None = None

    def declare_all(self) -> None:
        """Declare all stdio functions."""
        self._declare_printf()

    def _declare_printf(self) -> None:
        """Declare printf: int printf(const char* format, ...)"""
        if self.printf is not None:
            return
        fn_ty = ir.FunctionType(
            self.codegen.types.i32,
            [self.codegen.types.str_ptr],
            var_arg=True,
        )
        self.printf = ir.Function(self.codegen.module, fn_ty, name="printf")
