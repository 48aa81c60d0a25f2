"""
Target setup, verification and object emission for the Ember language compiler.

This module resolves a target triple to a target machine, stamps the
module with the triple and data layout, verifies the parsed module and
writes the object file. No optimization passes are run.
"""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from llvmlite import ir, binding as llvm

from ember_lang.internals.errors import raise_codegen_error


class LLVMEmitter:
    """Handles target machine setup, module verification and object output."""

    def __init__(self) -> None:
        self._llvm_init = False
        self._tm_cache: Dict[str, llvm.TargetMachine] = {}

    def ensure_llvm(self) -> None:
        """Initialize LLVM native target and assembly printer.

        Safe to call multiple times.
        """
        if self._llvm_init:
            return
        llvm.initialize_native_target()
        llvm.initialize_native_asmprinter()
        self._llvm_init = True

    def create_target_machine(self, target_triple: str | None = None) -> llvm.TargetMachine:
        """Create (or reuse) a target machine for `target_triple`.

        Linux targets use the PIC relocation model.

        Args:
            target_triple: Target triple string, or None for the host.

        Returns:
            Configured TargetMachine instance.

        Raises:
            TargetResolutionFailure: If LLVM does not know the triple.
        """
        self.ensure_llvm()
        triple = target_triple or llvm.get_default_triple()

        tm = self._tm_cache.get(triple)
        if tm is not None:
            return tm

        try:
            target = llvm.Target.from_triple(triple)
        except RuntimeError as e:
            raise_codegen_error("CE0201", triple=triple, reason=str(e).strip())

        reloc = "pic" if "linux" in triple.lower() else "default"
        tm = target.create_target_machine(reloc=reloc)
        self._tm_cache[triple] = tm
        return tm

    def prepare_module(self, module: Union[ir.Module, llvm.ModuleRef],
                       target_triple: str | None = None) -> llvm.TargetMachine:
        """Set the module's triple and data layout, returning the target machine."""
        triple = target_triple or llvm.get_default_triple()
        tm = self.create_target_machine(triple)
        module.triple = triple
        module.data_layout = str(tm.target_data)
        return tm

    def parse(self, module: ir.Module, when: str = "parse") -> llvm.ModuleRef:
        """Parse textual IR into a binding module.

        Raises:
            MalformedModule: If LLVM rejects the textual IR.
        """
        self.ensure_llvm()
        try:
            return llvm.parse_assembly(str(module))
        except RuntimeError as e:
            raise_codegen_error("CE0203", when=when, reason=str(e).strip())

    @staticmethod
    def verify(llmod: llvm.ModuleRef, when: str = "unspecified") -> None:
        """Verify LLVM IR correctness and structure.

        Args:
            llmod: The LLVM module to verify.
            when: Description of when verification is happening (for error messages).

        Raises:
            MalformedModule: If verification fails.
        """
        try:
            llmod.verify()
        except RuntimeError as e:
            raise_codegen_error("CE0203", when=when, reason=str(e).strip())

    def write_object(self, llmod: llvm.ModuleRef, tm: llvm.TargetMachine, out: Path) -> Path:
        """Emit an object file for `llmod` at `out`.

        The destination is opened before code is emitted. Bytes go to a
        temporary file in the same directory which replaces `out` only once
        fully written; a failure leaves no partial artifact behind.

        Raises:
            FileOpenFailure: If the destination cannot be created or written.
        """
        out = Path(out)
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{out.name}.", suffix=".tmp", dir=out.parent)
        except OSError as e:
            raise_codegen_error("CE0202", path=str(out), reason=e.strerror or str(e))

        tmp_path: Optional[Path] = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(tm.emit_object(llmod))
            os.replace(tmp_path, out)
            tmp_path = None
        except OSError as e:
            raise_codegen_error("CE0202", path=str(out), reason=e.strerror or str(e))
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
        return out
