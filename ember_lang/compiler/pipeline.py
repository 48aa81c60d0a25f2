"""
One-call compilation of a typed Ember program to an object file.

Exit codes follow the driver convention: 0 on success, 2 when compilation
failed.
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional

from ember_lang.backend.codegen_llvm import LLVMCodegen
from ember_lang.internals import errors as er
from ember_lang.internals.report import Reporter
from ember_lang.semantics.ast import Program


def compile_program(program: Program, out: Path = Path("output.o"),
                    reporter: Optional[Reporter] = None, **options) -> int:
    """Generate, verify and emit `program`, reporting any failure.

    Args:
        program: Typed AST of the whole program.
        out: Output object path.
        reporter: Diagnostics collector; a fresh one is used when omitted.
        **options: Forwarded to `LLVMCodegen.compile` (target_triple, verify,
            dump_ir, debug, ir_stream).

    Returns:
        Process exit code.
    """
    reporter = reporter or Reporter()
    cg = LLVMCodegen()
    try:
        cg.compile(program, out=out, **options)
    except er.CodegenError as e:
        er.report(reporter, e)
        reporter.print()
        return 2
    return 0
