"""
Core runtime coordinator for LLVM code generation.

The generated code depends on a single C library function, printf, plus
the read-only format string it is called with.
"""
from __future__ import annotations

import typing

from ember_lang.backend.runtime.externs.libc_stdio import LibCStdio
from ember_lang.backend.runtime.formatting import FormattingOperations

if typing.TYPE_CHECKING:
    from ember_lang.backend.codegen_llvm import LLVMCodegen


class LLVMRuntime:
    """Main runtime coordinator that manages all runtime support operations."""

    def __init__(self, codegen: LLVMCodegen) -> None:
        """Initialize runtime support with reference to main codegen instance.

        Args:
            codegen: The main LLVMCodegen instance providing context and module.
        """
        self.codegen = codegen

        self.libc_stdio = LibCStdio(codegen)
        self.formatting = FormattingOperations(codegen)

    def declare_externs(self) -> None:
        """Declare printf and the integer format string.

        Must run before any statement is lowered; print statements reference both.
        """
        self.libc_stdio.declare_all()
        self.formatting.declare_format_strings()
