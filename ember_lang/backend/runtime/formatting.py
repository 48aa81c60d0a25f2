"""
Format strings and print operations for LLVM code generation.
"""
from __future__ import annotations

import typing

from llvmlite import ir

from ember_lang.backend.constants import PRINT_INT_FORMAT
from ember_lang.backend.expressions.casts import cast_to_spec
from ember_lang.backend.llvm_types import TYPE_WIDTHS
from ember_lang.backend.utils import require_builder
from ember_lang.internals.errors import raise_internal_error
from ember_lang.semantics.typesys import BuiltinType

if typing.TYPE_CHECKING:
    from ember_lang.backend.codegen_llvm import LLVMCodegen
    from ember_lang.backend.functions import FunctionContext


class FormattingOperations:
    """Manages the integer format string and printf calls."""

    def __init__(self, codegen: LLVMCodegen) -> None:
        self.codegen = codegen
        self.fmt_int: ir.GlobalVariable | None = None

    def declare_format_strings(self) -> None:
        """Create the read-only, NUL-terminated integer template global."""
        if self.fmt_int is not None:
            return
        data = bytearray(PRINT_INT_FORMAT.encode("utf-8") + b"\x00")
        array_ty = ir.ArrayType(self.codegen.types.i8, len(data))
        fmt = ir.GlobalVariable(self.codegen.module, array_ty, name=".fmt.int")
        fmt.linkage = "internal"
        fmt.global_constant = True
        fmt.unnamed_addr = "unnamed_addr"
        fmt.initializer = ir.Constant(array_ty, data)
        self.fmt_int = fmt

    def emit_print_value(self, ctx: 'FunctionContext', v: ir.Value) -> None:
        """Call printf with the integer template and `v` widened to 64 bits.

        Booleans are zero-extended; other integers are sign-extended. Loaded
        values carry no signedness, so an unsigned slot holding a value with
        its top bit set prints negative (`let x: u8 = 255; print(x);` prints -1).
        """
        printf = self.codegen.runtime.libc_stdio.printf
        if printf is None or self.fmt_int is None:
            raise_internal_error("CE0015", message="printf runtime not declared")

        builder = require_builder(ctx)
        zero = ir.Constant(self.codegen.types.i32, 0)
        fmt_ptr = builder.gep(self.fmt_int, [zero, zero], inbounds=True, name="fmt_ptr")
        wide = cast_to_spec(ctx, v, TYPE_WIDTHS[BuiltinType.I64])
        builder.call(printf, [fmt_ptr, wide])
