# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, NoReturn, Optional, Type

from ember_lang.internals.report import Span, Reporter


class Category(str, Enum):
    GENERAL   = "general"
    NAME      = "name"
    FUNC      = "function"
    TYPE      = "type"
    BACKEND   = "backend"
    INTERNAL  = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}


#
# --- Exceptions
#

class CodegenError(RuntimeError):
    """Base class for every failure raised while lowering or emitting a program."""

    def __init__(self, code: str, message: str, span: Optional[Span] = None) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.span = span


class UnknownType(CodegenError):
    pass


class UndefinedSymbol(CodegenError):
    pass


class UndefinedFunction(CodegenError):
    pass


class UnsupportedOperator(CodegenError):
    pass


class ArgumentCountMismatch(CodegenError):
    pass


class TargetResolutionFailure(CodegenError):
    pass


class FileOpenFailure(CodegenError):
    pass


class MalformedModule(CodegenError):
    pass


class InternalCompilerError(CodegenError):
    """Compiler bug: an invariant of the generator itself was violated."""


def report(r: Reporter, error: CodegenError, span: Optional[Span] = None) -> None:
    """Record an already-raised codegen error as a diagnostic.

    The location defaults to the span the error was raised with.
    """
    r.error(error.code, error.message, span or error.span)

def raise_codegen_error(code: str, span: Optional[Span] = None, **kwargs) -> NoReturn:
    """Raise the exception class registered for `code` with its formatted text.

    Args:
        code: Error code (e.g., "CE0102")
        span: Source location of the offending node, when known
        **kwargs: Format parameters for the error message

    Raises:
        CodegenError: The subclass bound to the code.
    """
    text = _fmt(code, **kwargs)
    raise _EXCEPTIONS.get(code, CodegenError)(code, text, span)

def raise_internal_error(code: str, **kwargs) -> NoReturn:
    """Raise an InternalCompilerError for internal compiler errors.

    Internal errors indicate compiler bugs, not user code issues.
    These are raised as Python exceptions during code generation.

    Args:
        code: Error code (e.g., "CE0009")
        **kwargs: Format parameters for the error message

    Raises:
        InternalCompilerError: Always raises with formatted error message
    """
    text = _fmt(code, **kwargs)
    raise InternalCompilerError(code, text)


#
# --- Helpers
#

_EXCEPTIONS: Dict[str, Type[CodegenError]] = {}

def _add(msg: ErrorMessage, exc: Type[CodegenError] = InternalCompilerError) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg
    _EXCEPTIONS[msg.code] = exc

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Internal errors (compiler bugs) - CE00xx range
_add(ErrorMessage("CE0009",
    "builder not initialized",
    Category.INTERNAL, "IR builder is None - function compilation context required."))

_add(ErrorMessage("CE0010",
    "function context not initialized",
    Category.INTERNAL, "Function context is None - cannot emit code outside function context."))

_add(ErrorMessage("CE0015",
    "AST invariant violated: {message}",
    Category.INTERNAL, "AST structure constraint violated during code generation."))

_add(ErrorMessage("CE0016",
    "scope stack underflow: attempted to pop from empty scope stack",
    Category.INTERNAL, "Push/pop mismatch - each push() must be paired with exactly one pop()."))

# Program errors surfaced while lowering - CE01xx range
_add(ErrorMessage("CE0101",
    "unknown type '{type}'",
    Category.TYPE, "Type tag is not one of the fixed-width integer types."), UnknownType)

_add(ErrorMessage("CE0102",
    "undefined symbol '{name}'",
    Category.NAME, "Name is not bound in any enclosing scope."), UndefinedSymbol)

_add(ErrorMessage("CE0103",
    "undefined function '{name}'",
    Category.FUNC, "Call target is not a registered function."), UndefinedFunction)

_add(ErrorMessage("CE0104",
    "unsupported operator '{op}'",
    Category.GENERAL, "Operator is outside the arithmetic and relational operator set."), UnsupportedOperator)

_add(ErrorMessage("CE0105",
    "function '{name}' expects {expected} argument(s), got {got}",
    Category.FUNC, "Call supplies a different number of arguments than the function declares."), ArgumentCountMismatch)

_add(ErrorMessage("CE0106",
    "'{name}' belongs to an enclosing function and cannot be referenced here",
    Category.NAME, "Nested function bodies cannot address storage of the function that contains them."), UndefinedSymbol)

# Backend emission - CE02xx range
_add(ErrorMessage("CE0201",
    "cannot resolve target '{triple}': {reason}",
    Category.BACKEND, "No registered LLVM target matches the requested triple."), TargetResolutionFailure)

_add(ErrorMessage("CE0202",
    "could not open file '{path}': {reason}",
    Category.BACKEND, "Destination object file could not be created."), FileOpenFailure)

_add(ErrorMessage("CE0203",
    "LLVM IR verification failed ({when}): {reason}",
    Category.BACKEND, "Generated module is not internally consistent and was not handed to the backend."), MalformedModule)
