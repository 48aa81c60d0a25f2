"""
Shared fixtures: build programs, JIT the generated module, capture printf.

Generated code calls `printf` with the integer template and one 64-bit
value. The JIT resolves `printf` to a ctypes callback registered once per
process, so printed values can be asserted on directly.
"""
from __future__ import annotations

import ctypes
from typing import List, Tuple

import pytest
from llvmlite import ir, binding as llvm

from ember_lang.backend.codegen_llvm import LLVMCodegen
from ember_lang.semantics.ast import Program, Stmt


_PRINTED: List[Tuple[bytes, int]] = []


@ctypes.CFUNCTYPE(ctypes.c_int, ctypes.c_char_p, ctypes.c_int64)
def _printf_hook(fmt, value):
    _PRINTED.append((fmt, value))
    return 0


_hook_installed = False


def _init_llvm() -> None:
    global _hook_installed
    llvm.initialize_native_target()
    llvm.initialize_native_asmprinter()
    if not _hook_installed:
        llvm.add_symbol("printf", ctypes.cast(_printf_hook, ctypes.c_void_p).value)
        _hook_installed = True


class Jitted:
    """A verified module loaded into MCJIT."""

    def __init__(self, module: ir.Module) -> None:
        _init_llvm()
        llmod = llvm.parse_assembly(str(module))
        llmod.verify()
        tm = llvm.Target.from_default_triple().create_target_machine()
        self.engine = llvm.create_mcjit_compiler(llmod, tm)
        self.engine.finalize_object()

    def function(self, name: str, restype, *argtypes):
        addr = self.engine.get_function_address(name)
        assert addr, f"no symbol {name!r} in JIT module"
        return ctypes.CFUNCTYPE(restype, *argtypes)(addr)

    def run_main(self) -> int:
        return self.function("main", ctypes.c_int32)()


def build(*statements: Stmt) -> LLVMCodegen:
    """Generate a module for a program made of `statements`."""
    cg = LLVMCodegen()
    cg.build_module(Program(list(statements)))
    return cg


@pytest.fixture
def printed():
    """Values passed to printf during the test, in call order."""
    _PRINTED.clear()
    yield _PRINTED
    _PRINTED.clear()


@pytest.fixture
def run(printed):
    """Build, JIT and run `main`; returns the list of printed integers."""
    def _run(*statements: Stmt) -> List[int]:
        cg = build(*statements)
        jitted = Jitted(cg.module)
        assert jitted.run_main() == 0
        assert all(fmt == b"%lld\n" for fmt, _ in printed)
        return [value for _, value in printed]
    return _run


@pytest.fixture
def codegen():
    """Callable building a module from statements; returns the LLVMCodegen."""
    return build


@pytest.fixture
def jit(printed):
    """Callable loading a generated module into the JIT."""
    # Keep engines alive for the whole test: a temporary Jitted would free
    # its machine code while ctypes wrappers still point into it.
    engines: List[Jitted] = []

    def _jit(module: ir.Module) -> Jitted:
        jitted = Jitted(module)
        engines.append(jitted)
        return jitted
    yield _jit
    engines.clear()
