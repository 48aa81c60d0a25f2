"""
LLVM backend orchestrator for the Ember language compiler.

This module provides the main LLVM compilation interface, coordinating
between specialized subsystems for type mapping, scope management, code
emission and object output.

API:
    from ember_lang.backend.codegen_llvm import LLVMCodegen
    cg = LLVMCodegen()
    obj_path = cg.compile(program_ast, out=Path("output.o"))

If you only want the LLVM IR without an object file, call `build_module()`
then `str(cg.module)`.
"""
from __future__ import annotations
import sys
from pathlib import Path
from typing import Optional, TextIO

from llvmlite import ir

from ember_lang.semantics.ast import Program
from ember_lang.backend.llvm_types import LLVMTypeSystem
from ember_lang.backend.runtime import LLVMRuntime
from ember_lang.backend.memory import ScopeManager
from ember_lang.backend.expressions import ExpressionEmitter
from ember_lang.backend.statements import StatementEmitter
from ember_lang.backend.functions import LLVMFunctionManager
from ember_lang.backend.llvm_emission import LLVMEmitter
from ember_lang.internals.errors import raise_internal_error


class LLVMCodegen:
    """Main LLVM backend orchestrator for the Ember language compiler.

    One instance generates one module. Calling `build_module` twice is an
    internal error.
    """

    def __init__(self, module_name: str = "ember_module", entry_name: str = "main") -> None:
        """Initialize the LLVM code generator with all specialized subsystems.

        Args:
            module_name: Name for the LLVM module.
            entry_name: Symbol name of the function wrapping top-level statements.
        """
        self.module: ir.Module = ir.Module(name=module_name)
        self.entry_name = entry_name

        self.types = LLVMTypeSystem()
        self.runtime = LLVMRuntime(self)
        self.memory = ScopeManager()
        self.expressions = ExpressionEmitter(self)
        self.statements = StatementEmitter(self)
        self.functions = LLVMFunctionManager(self)
        self.emitter = LLVMEmitter()

        self.entry_function: Optional[ir.Function] = None

    @property
    def printf(self) -> ir.Function | None:
        """Access to printf runtime function."""
        return self.runtime.libc_stdio.printf

    def build_module(self, program: Program) -> ir.Module:
        """Generate LLVM IR for a whole program and return the module.

        Raises:
            CodegenError: Any generation failure (unknown type, undefined name, ...).
        """
        if self.entry_function is not None:
            raise_internal_error("CE0015", message="build_module called twice on one generator")

        self.runtime.declare_externs()
        self.entry_function = self.functions.emit_entry_function(program)
        return self.module

    def dump_ir(self, stream: Optional[TextIO] = None, numbered: bool = False) -> None:
        """Write the textual IR of the module to `stream` (stderr by default)."""
        out = stream if stream is not None else sys.stderr
        ir_text = str(self.module)
        if not numbered:
            out.write(ir_text)
            if not ir_text.endswith("\n"):
                out.write("\n")
            return
        for i, line in enumerate(ir_text.splitlines(), 1):
            print(f"{i:4} {line}", file=out)

    def compile(
        self,
        program: Program,
        out: Path | None = None,
        target_triple: str | None = None,
        verify: bool = True,
        dump_ir: bool = True,
        debug: bool = False,
        ir_stream: Optional[TextIO] = None,
    ) -> Path:
        """Complete pipeline from AST to object file.

        Args:
            program: Typed AST of the whole program.
            out: Output object path (default `output.o`).
            target_triple: Target triple, or None for the host.
            verify: Verify the module before emitting code.
            dump_ir: Print the textual IR before emission.
            debug: Number the lines of the IR dump.
            ir_stream: Where the IR dump goes (stderr by default).

        Returns:
            Path to the written object file.

        Raises:
            TargetResolutionFailure: If the triple is unknown.
            MalformedModule: If the module fails verification.
            FileOpenFailure: If the object file cannot be written.
        """
        mod_ir = self.build_module(program)

        tm = self.emitter.prepare_module(mod_ir, target_triple)

        if dump_ir:
            self.dump_ir(ir_stream, numbered=debug)

        llmod = self.emitter.parse(mod_ir, "pre-emission")
        if verify:
            self.emitter.verify(llmod, "pre-emission")

        out_path = Path(out) if out is not None else Path("output.o")
        return self.emitter.write_object(llmod, tm, out_path)
