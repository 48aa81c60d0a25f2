# semantics/ast.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from ember_lang.internals.report import Span
from ember_lang.semantics.typesys import Type

# === Core node base ===
#
# Nodes are immutable once the front end has built them. Sequence fields
# accept any iterable and are stored as tuples.

def _freeze(node: object, *names: str) -> None:
    for name in names:
        object.__setattr__(node, name, tuple(getattr(node, name)))

@dataclass(frozen=True)
class Node:
    pass

@dataclass(frozen=True)
class Expr(Node):
    pass

@dataclass(frozen=True)
class Stmt(Node):
    pass

# === Expressions ===

@dataclass(frozen=True)
class IntLiteral(Expr):
    value: int
    loc: Optional[Span] = None

@dataclass(frozen=True)
class BoolLiteral(Expr):
    value: bool
    loc: Optional[Span] = None

@dataclass(frozen=True)
class BinaryExpr(Expr):
    op: str                          # "+", "-", "*", "/", "==", "!=", "<", "<=", ">", ">="
    left: Expr
    right: Expr
    loc: Optional[Span] = None

@dataclass(frozen=True)
class VarExpr(Expr):
    name: str
    loc: Optional[Span] = None

@dataclass(frozen=True)
class AssignExpr(Expr):
    name: str
    value: Expr
    loc: Optional[Span] = None

@dataclass(frozen=True)
class CallExpr(Expr):
    name: str
    args: Tuple[Expr, ...] = ()
    loc: Optional[Span] = None

    def __post_init__(self) -> None:
        _freeze(self, "args")

# === Statements ===

@dataclass(frozen=True)
class ExpressionStatement(Stmt):
    expr: Expr
    loc: Optional[Span] = None

@dataclass(frozen=True)
class PrintStatement(Stmt):
    expr: Expr
    loc: Optional[Span] = None

@dataclass(frozen=True)
class LetStatement(Stmt):
    name: str
    type: Type
    expr: Expr
    loc: Optional[Span] = None

@dataclass(frozen=True)
class BlockStatement(Stmt):
    statements: Tuple[Stmt, ...] = ()
    loc: Optional[Span] = None

    def __post_init__(self) -> None:
        _freeze(self, "statements")

@dataclass(frozen=True)
class ElifBranch(Node):
    condition: Expr
    branch: Stmt
    loc: Optional[Span] = None

@dataclass(frozen=True)
class IfStatement(Stmt):
    condition: Expr
    then_branch: Stmt
    elif_branches: Tuple[ElifBranch, ...] = ()
    else_branch: Optional[Stmt] = None
    loc: Optional[Span] = None

    def __post_init__(self) -> None:
        _freeze(self, "elif_branches")

@dataclass(frozen=True)
class Param:
    name: str
    type: Type
    loc: Optional[Span] = None

@dataclass(frozen=True)
class FnStatement(Stmt):
    name: str
    params: Tuple[Param, ...]
    return_type: Type
    body: Stmt
    loc: Optional[Span] = None

    def __post_init__(self) -> None:
        _freeze(self, "params")

@dataclass(frozen=True)
class ReturnStatement(Stmt):
    expr: Expr
    loc: Optional[Span] = None

@dataclass(frozen=True)
class WhileStatement(Stmt):
    condition: Expr
    body: Stmt
    loc: Optional[Span] = None

# === Program structure ===

@dataclass(frozen=True)
class Program(Node):
    statements: Tuple[Stmt, ...] = ()
    loc: Optional[Span] = None

    def __post_init__(self) -> None:
        _freeze(self, "statements")
