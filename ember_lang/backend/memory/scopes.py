"""
Lexical scope management for code generation.

This module handles:
- A stack of scope frames, one per block or function body
- Name -> storage slot / function symbol bindings with shadowing
- Innermost-to-outermost name resolution
- Entry-block allocation of storage slots

Frames are owned by the stack. Popping a frame releases its bindings, so a
frame is never consulted after its lexical extent ends.
"""
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union, TYPE_CHECKING

from llvmlite import ir

from ember_lang.backend.llvm_types import IntSpec
from ember_lang.internals.errors import raise_codegen_error, raise_internal_error
from ember_lang.internals.report import Span

if TYPE_CHECKING:
    from ember_lang.backend.functions import FunctionContext


@dataclass(frozen=True)
class StorageSlot:
    """A mutable local: an entry-block alloca with its declared type."""
    name: str
    ptr: ir.AllocaInstr
    spec: IntSpec
    function: ir.Function


@dataclass(frozen=True)
class FunctionSymbol:
    """A generated function together with its declared signature."""
    name: str
    function: ir.Function
    param_specs: tuple[IntSpec, ...]
    return_spec: IntSpec


Binding = Union[StorageSlot, FunctionSymbol]


@dataclass
class Frame:
    """One lexical scope. `enclosing` is None only for the root frame."""
    enclosing: Optional['Frame'] = None
    bindings: Dict[str, Binding] = field(default_factory=dict)

    def lookup(self, name: str) -> Optional[Binding]:
        frame: Optional[Frame] = self
        while frame is not None:
            if name in frame.bindings:
                return frame.bindings[name]
            frame = frame.enclosing
        return None


class ScopeManager:
    """Manages the scope frame stack for LLVM code generation."""

    def __init__(self) -> None:
        self._frames: List[Frame] = [Frame()]

    @property
    def current(self) -> Frame:
        return self._frames[-1]

    @property
    def depth(self) -> int:
        return len(self._frames)

    def push(self) -> Frame:
        """Open a new frame whose enclosing frame is the current one."""
        frame = Frame(enclosing=self.current)
        self._frames.append(frame)
        return frame

    def pop(self) -> Frame:
        """Close the current frame and return to its enclosing frame.

        Raises:
            InternalCompilerError: If only the root frame is left.
        """
        if len(self._frames) <= 1:
            raise_internal_error("CE0016")
        frame = self._frames.pop()
        frame.bindings.clear()
        return self.current

    @contextmanager
    def scope(self) -> Iterator[Frame]:
        """Push a frame for the duration of the block, popping it however the block exits."""
        frame = self.push()
        try:
            yield frame
        finally:
            self.pop()

    def define(self, name: str, binding: Binding) -> None:
        """Bind `name` in the innermost frame, shadowing any outer binding."""
        self.current.bindings[name] = binding

    def get(self, name: str, span: Optional[Span] = None) -> Binding:
        """Resolve `name` from the innermost frame outward.

        Raises:
            UndefinedSymbol: If no frame in the chain binds the name.
        """
        binding = self.current.lookup(name)
        if binding is None:
            raise_codegen_error("CE0102", span=span, name=name)
        return binding

    def find_local_slot(self, name: str, ctx: 'FunctionContext',
                        span: Optional[Span] = None) -> StorageSlot:
        """Resolve `name` to a storage slot addressable from the function in `ctx`.

        Raises:
            UndefinedSymbol: If the name is unbound, names a function, or
                belongs to an enclosing function.
        """
        binding = self.get(name, span)
        if not isinstance(binding, StorageSlot):
            raise_codegen_error("CE0102", span=span, name=name)
        if binding.function is not ctx.function:
            raise_codegen_error("CE0106", span=span, name=name)
        return binding

    def find_function(self, name: str, span: Optional[Span] = None) -> FunctionSymbol:
        """Resolve `name` to a registered function.

        Raises:
            UndefinedFunction: If the name is unbound or bound to a variable.
        """
        binding = self.current.lookup(name)
        if not isinstance(binding, FunctionSymbol):
            raise_codegen_error("CE0103", span=span, name=name)
        return binding

    def create_local(self, ctx: 'FunctionContext', name: str, spec: IntSpec,
                     init: Optional[ir.Value] = None) -> StorageSlot:
        """Allocate a named slot in the entry block and bind it in the current frame.

        Args:
            ctx: Function being generated.
            name: Source-level variable name.
            spec: Declared width and signedness of the slot.
            init: Optional value (already of the slot's width) to store.

        Returns:
            The new storage slot.
        """
        ptr = self.entry_alloca(ctx, ir.IntType(spec.bit_width), name)
        slot = StorageSlot(name=name, ptr=ptr, spec=spec, function=ctx.function)
        self.define(name, slot)
        if init is not None:
            ctx.builder.store(init, ptr)
        return slot

    @staticmethod
    def entry_alloca(ctx: 'FunctionContext', ty: ir.Type, name: str) -> ir.AllocaInstr:
        """Create an alloca in the function's entry block, ahead of its branch to start."""
        if ctx.alloca_builder is None:
            raise_internal_error("CE0009")
        ctx.alloca_builder.position_before(ctx.entry_branch)
        return ctx.alloca_builder.alloca(ty, name=name)
