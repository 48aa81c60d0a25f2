from __future__ import annotations

import ctypes

import pytest
from llvmlite import binding as llvm

from ember_lang.internals.errors import UndefinedSymbol
from ember_lang.semantics.ast import (
    AssignExpr, BinaryExpr, BlockStatement, CallExpr, ExpressionStatement, FnStatement, IfStatement,
    IntLiteral, LetStatement, Param, PrintStatement, ReturnStatement, VarExpr,
)


def _add_fn() -> FnStatement:
    return FnStatement(
        "f", [Param("a", "i8"), Param("b", "i32")], "i32",
        BlockStatement([ReturnStatement(BinaryExpr("+", VarExpr("a"), VarExpr("b")))]),
    )


def _fact_fn() -> FnStatement:
    n = VarExpr("n")
    return FnStatement(
        "fact", [Param("n", "i64")], "i64",
        BlockStatement([
            IfStatement(
                BinaryExpr("<=", n, IntLiteral(1)),
                BlockStatement([ReturnStatement(IntLiteral(1))]),
                [],
                BlockStatement([ReturnStatement(
                    BinaryExpr("*", n, CallExpr("fact", [BinaryExpr("-", n, IntLiteral(1))])))]),
            ),
        ]),
    )


def test_mixed_width_parameters(codegen, jit):
    cg = codegen(_add_fn())
    text = str(cg.module)
    assert 'define i32 @"f"(i8 %"a", i32 %"b")' in text
    assert "sext i8" in text

    f = jit(cg.module).function("f", ctypes.c_int32, ctypes.c_int8, ctypes.c_int32)
    assert f(1, 2) == 3
    assert f(-1, 5) == 4


def test_call_from_top_level(run):
    assert run(_add_fn(), PrintStatement(CallExpr("f", [IntLiteral(1), IntLiteral(2)]))) == [3]


def test_recursion_resolves_own_name(run):
    assert run(_fact_fn(), PrintStatement(CallExpr("fact", [IntLiteral(10)]))) == [3628800]


def test_parameters_are_assignable(run):
    bump = FnStatement(
        "bump", [Param("x", "u16")], "u16",
        BlockStatement([
            ExpressionStatement(AssignExpr("x", BinaryExpr("+", VarExpr("x"), IntLiteral(1)))),
            ReturnStatement(VarExpr("x")),
        ]),
    )
    assert run(bump, PrintStatement(CallExpr("bump", [IntLiteral(41)]))) == [42]


def test_code_after_return_is_not_emitted(codegen):
    body = BlockStatement([
        ReturnStatement(IntLiteral(1)),
        PrintStatement(IntLiteral(2)),
    ])
    cg = codegen(FnStatement("early", [], "i32", body))
    fn = cg.module.get_global("early")
    assert [b.name for b in fn.blocks] == ["entry", "start"]
    assert [i.opname for i in fn.blocks[1].instructions] == ["ret"]


def test_nested_function_cannot_reach_outer_locals(codegen):
    outer = FnStatement("outer", [], "i32", BlockStatement([
        LetStatement("x", "i32", IntLiteral(1)),
        FnStatement("inner", [], "i32", BlockStatement([ReturnStatement(VarExpr("x"))])),
        ReturnStatement(VarExpr("x")),
    ]))
    with pytest.raises(UndefinedSymbol) as exc:
        codegen(outer)
    assert exc.value.code == "CE0106"


def test_nested_function_is_scoped_to_its_block(run):
    outer = FnStatement("outer", [], "i32", BlockStatement([
        FnStatement("seven", [], "i32", BlockStatement([ReturnStatement(IntLiteral(7))])),
        ReturnStatement(CallExpr("seven", [])),
    ]))
    assert run(outer, PrintStatement(CallExpr("outer", []))) == [7]


def test_colliding_function_names_get_unique_symbols(codegen):
    main_fn = FnStatement("main", [], "i32", BlockStatement([ReturnStatement(IntLiteral(3))]))
    cg = codegen(main_fn, PrintStatement(CallExpr("main", [])))
    names = [f.name for f in cg.module.functions]
    assert "main" in names
    assert len(set(names)) == len(names)
    assert cg.entry_function.name == "main"


def test_parameter_slots_form_valid_ir(codegen):
    cg = codegen(_add_fn(), LetStatement("r", "i32", CallExpr("f", [IntLiteral(1), IntLiteral(2)])))
    fn = cg.module.get_global("f")
    entry, start = fn.blocks
    assert [i.opname for i in entry.instructions] == ["alloca", "alloca", "br"]
    assert [i.opname for i in start.instructions][:2] == ["store", "store"]

    llvm.parse_assembly(str(cg.module)).verify()
