from __future__ import annotations

from ember_lang.semantics.ast import (
    AssignExpr, BinaryExpr, BlockStatement, BoolLiteral, ElifBranch, ExpressionStatement,
    IfStatement, IntLiteral, LetStatement, PrintStatement, VarExpr, WhileStatement,
)


def _print_block(value: int) -> BlockStatement:
    return BlockStatement([PrintStatement(IntLiteral(value))])


def test_elif_chain_runs_exactly_one_branch(run):
    stmt = IfStatement(
        BoolLiteral(False),
        BlockStatement([]),
        [ElifBranch(BoolLiteral(True), _print_block(1))],
        _print_block(2),
    )
    assert run(stmt) == [1]


def test_else_runs_when_no_condition_holds(run):
    stmt = IfStatement(
        BoolLiteral(False), _print_block(1),
        [ElifBranch(BoolLiteral(False), _print_block(2)),
         ElifBranch(BoolLiteral(False), _print_block(3))],
        _print_block(4),
    )
    assert run(stmt, PrintStatement(IntLiteral(5))) == [4, 5]


def test_if_without_else_falls_through_to_merge(run):
    stmt = IfStatement(BinaryExpr(">", IntLiteral(1), IntLiteral(2)), _print_block(1))
    assert run(stmt, PrintStatement(IntLiteral(9))) == [9]


def test_integer_conditions_compare_against_zero(run):
    out = run(
        LetStatement("n", "i32", IntLiteral(3)),
        IfStatement(VarExpr("n"), _print_block(1), [], _print_block(0)),
    )
    assert out == [1]


def test_elif_test_blocks_are_wired_in_sequence(codegen):
    stmt = IfStatement(
        BoolLiteral(False), _print_block(1),
        [ElifBranch(BoolLiteral(False), _print_block(2)),
         ElifBranch(BoolLiteral(True), _print_block(3))],
    )
    main = codegen(stmt).entry_function
    blocks = {b.name: b for b in main.blocks}

    assert set(blocks) >= {"if.then", "if.elif.0.test", "if.elif.0.body",
                           "if.elif.1.test", "if.elif.1.body", "if.end"}
    first = blocks["if.elif.0.test"].terminator
    assert first.operands[1] is blocks["if.elif.0.body"]
    assert first.operands[2] is blocks["if.elif.1.test"]
    last = blocks["if.elif.1.test"].terminator
    assert last.operands[2] is blocks["if.end"]
    for body in ("if.then", "if.elif.0.body", "if.elif.1.body"):
        assert blocks[body].terminator.operands[0] is blocks["if.end"]


def test_while_loop_counts(run):
    out = run(
        LetStatement("i", "i32", IntLiteral(0)),
        LetStatement("sum", "i64", IntLiteral(0)),
        WhileStatement(
            BinaryExpr("<", VarExpr("i"), IntLiteral(5)),
            BlockStatement([
                ExpressionStatement(AssignExpr("i", BinaryExpr("+", VarExpr("i"), IntLiteral(1)))),
                ExpressionStatement(AssignExpr("sum", BinaryExpr("+", VarExpr("sum"), VarExpr("i")))),
            ]),
        ),
        PrintStatement(VarExpr("sum")),
        PrintStatement(VarExpr("i")),
    )
    assert out == [15, 5]


def test_infinite_loop_structure(codegen):
    main = codegen(WhileStatement(BoolLiteral(True), BlockStatement([]))).entry_function
    blocks = {b.name: b for b in main.blocks}

    assert blocks["entry"].terminator.operands[0] is blocks["start"]
    assert blocks["start"].terminator.operands[0] is blocks["while.test"]

    test_term = blocks["while.test"].terminator
    assert test_term.operands[1] is blocks["while.body"]
    assert test_term.operands[2] is blocks["while.end"]

    assert blocks["while.body"].terminator.operands[0] is blocks["while.test"]


def test_block_scope_shadows_and_restores(run):
    out = run(
        LetStatement("x", "i32", IntLiteral(1)),
        BlockStatement([
            LetStatement("x", "i8", IntLiteral(2)),
            PrintStatement(VarExpr("x")),
            ExpressionStatement(AssignExpr("x", IntLiteral(3))),
        ]),
        PrintStatement(VarExpr("x")),
    )
    assert out == [2, 1]


def test_loop_allocas_stay_in_entry_block(codegen):
    loop = WhileStatement(
        BoolLiteral(False),
        BlockStatement([LetStatement("tmp", "i32", IntLiteral(1))]),
    )
    main = codegen(loop).entry_function
    for block in main.blocks:
        allocas = [i for i in block.instructions if i.opname == "alloca"]
        if block.name == "entry":
            assert len(allocas) == 1
        else:
            assert allocas == []
