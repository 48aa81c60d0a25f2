"""Per-function generation state passed explicitly through emission."""
from __future__ import annotations
from dataclasses import dataclass

from llvmlite import ir

from ember_lang.backend.llvm_types import IntSpec


@dataclass
class FunctionContext:
    """The function being generated and the builders positioned inside it.

    The entry block holds only allocas and ends in `entry_branch`, a jump to
    the block where statements start. A nested function definition gets its
    own context; the enclosing function's context, and its builder position,
    are left untouched.
    """
    function: ir.Function
    builder: ir.IRBuilder
    alloca_builder: ir.IRBuilder
    entry_block: ir.Block
    entry_branch: ir.Instruction
    return_spec: IntSpec
