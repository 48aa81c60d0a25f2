"""
Type Width Table and LLVM type mapping for the Ember language compiler.

Every integer type tag resolves to a fixed (bit width, signedness) pair.
The table is built once at import time and is read-only afterwards; type
descriptors are never inferred from literal values.
"""
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from llvmlite import ir

from ember_lang.backend.constants import (
    INT8_BIT_WIDTH, INT16_BIT_WIDTH, INT32_BIT_WIDTH, INT64_BIT_WIDTH,
)
from ember_lang.internals.errors import raise_codegen_error
from ember_lang.internals.report import Span
from ember_lang.semantics.typesys import BuiltinType, Type as Ty


@dataclass(frozen=True)
class IntSpec:
    """Declared width and signedness of an integer storage location."""
    bit_width: int
    signed: bool

    def __str__(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.bit_width}"


TYPE_WIDTHS: Mapping[BuiltinType, IntSpec] = MappingProxyType({
    BuiltinType.I8: IntSpec(INT8_BIT_WIDTH, True),
    BuiltinType.I16: IntSpec(INT16_BIT_WIDTH, True),
    BuiltinType.I32: IntSpec(INT32_BIT_WIDTH, True),
    BuiltinType.I64: IntSpec(INT64_BIT_WIDTH, True),
    BuiltinType.U8: IntSpec(INT8_BIT_WIDTH, False),
    BuiltinType.U16: IntSpec(INT16_BIT_WIDTH, False),
    BuiltinType.U32: IntSpec(INT32_BIT_WIDTH, False),
    BuiltinType.U64: IntSpec(INT64_BIT_WIDTH, False),
})


def width_of(tag: Ty, span: Optional[Span] = None) -> IntSpec:
    """Resolve a type tag to its (bit width, signedness) descriptor.

    Args:
        tag: A BuiltinType member or its source spelling ("i32", "u8", ...).
        span: Location of the annotation, attached to the error.

    Returns:
        The IntSpec for the tag.

    Raises:
        UnknownType: If the tag is not one of the eight integer tags.
    """
    if isinstance(tag, str):
        try:
            tag = BuiltinType(tag)
        except ValueError:
            raise_codegen_error("CE0101", span=span, type=tag)
    spec = TYPE_WIDTHS.get(tag)
    if spec is None:
        raise_codegen_error("CE0101", span=span, type=tag)
    return spec


class LLVMTypeSystem:
    """LLVM types shared by the runtime declarations."""

    def __init__(self) -> None:
        self.i8: ir.IntType = ir.IntType(INT8_BIT_WIDTH)
        self.i32: ir.IntType = ir.IntType(INT32_BIT_WIDTH)
        self.str_ptr: ir.PointerType = ir.PointerType(self.i8)
