"""
Control flow statement emission for the Ember language compiler.

This module lowers blocks, if/elif/else chains and while loops into basic
blocks. Every block a construct branches to is created before the first
branch instruction of that construct is emitted, so branch targets always
exist when they are referenced.
"""
from __future__ import annotations
from typing import Optional, TYPE_CHECKING

from ember_lang.backend.expressions.casts import as_i1
from ember_lang.backend.utils import require_both_initialized

if TYPE_CHECKING:
    from llvmlite import ir
    from ember_lang.backend.codegen_llvm import LLVMCodegen
    from ember_lang.backend.functions import FunctionContext
    from ember_lang.semantics.ast import BlockStatement, IfStatement, WhileStatement, Stmt


def emit_block(codegen: 'LLVMCodegen', node: 'BlockStatement', ctx: 'FunctionContext') -> None:
    """Emit a block statement inside its own scope frame.

    The frame is popped on every exit path, including a raised error.
    """
    with codegen.memory.scope():
        codegen.statements.emit_statements(node.statements, ctx)


def emit_if(codegen: 'LLVMCodegen', node: 'IfStatement', ctx: 'FunctionContext') -> None:
    """Emit an if/elif/else chain.

    Block layout for `if c0 {A} elif c1 {B} elif c2 {C} else {D}`:

        current:  br c0, if.then, if.elif.0.test
        if.elif.0.test: br c1, if.elif.0.body, if.elif.1.test
        if.elif.1.test: br c2, if.elif.1.body, if.else
        if.then / if.elif.N.body / if.else: ...; br if.end
        if.end:   (generation continues here)

    Without an else branch the last false edge goes to if.end. When every
    arm returns, if.end has no predecessors and is closed with `unreachable`;
    statements after the chain are then skipped.

    Args:
        codegen: The main LLVMCodegen instance.
        node: The if statement node to emit.
        ctx: The function being generated.
    """
    builder, func = require_both_initialized(ctx)

    elifs = list(node.elif_branches)

    then_bb = func.append_basic_block(name="if.then")
    elif_bbs = [
        (func.append_basic_block(name=f"if.elif.{i}.test"),
         func.append_basic_block(name=f"if.elif.{i}.body"))
        for i in range(len(elifs))
    ]
    else_bb = func.append_basic_block(name="if.else") if node.else_branch is not None else None
    merge_bb = func.append_basic_block(name="if.end")

    def false_target(index: int) -> 'ir.Block':
        # Unit tried after elif `index - 1` fails (index 0 = after the primary test)
        if index < len(elif_bbs):
            return elif_bbs[index][0]
        return else_bb if else_bb is not None else merge_bb

    cond0 = as_i1(ctx, codegen.expressions.emit_expr(node.condition, ctx))
    builder.cbranch(cond0, then_bb, false_target(0))

    # The chain can only skip every arm when there is no else
    reaches_merge = else_bb is None
    reaches_merge |= _emit_arm(codegen, node.then_branch, then_bb, merge_bb, ctx)

    for i, (elif_node, (test_bb, body_bb)) in enumerate(zip(elifs, elif_bbs)):
        builder.position_at_end(test_bb)
        cond_i = as_i1(ctx, codegen.expressions.emit_expr(elif_node.condition, ctx))
        builder.cbranch(cond_i, body_bb, false_target(i + 1))
        reaches_merge |= _emit_arm(codegen, elif_node.branch, body_bb, merge_bb, ctx)

    if else_bb is not None:
        reaches_merge |= _emit_arm(codegen, node.else_branch, else_bb, merge_bb, ctx)

    builder.position_at_end(merge_bb)
    if not reaches_merge:
        builder.unreachable()


def emit_while(codegen: 'LLVMCodegen', node: 'WhileStatement', ctx: 'FunctionContext') -> None:
    """Emit a while loop.

    Creates test, body and after blocks. The test block is entered
    unconditionally and re-entered after every body iteration; generation
    continues in the after block.

    Args:
        codegen: The main LLVMCodegen instance.
        node: The while statement node to emit.
        ctx: The function being generated.
    """
    builder, func = require_both_initialized(ctx)

    test_bb = func.append_basic_block(name="while.test")
    body_bb = func.append_basic_block(name="while.body")
    after_bb = func.append_basic_block(name="while.end")

    builder.branch(test_bb)

    builder.position_at_end(test_bb)
    cond = as_i1(ctx, codegen.expressions.emit_expr(node.condition, ctx))
    builder.cbranch(cond, body_bb, after_bb)

    _emit_arm(codegen, node.body, body_bb, test_bb, ctx)

    builder.position_at_end(after_bb)


def _emit_arm(codegen: 'LLVMCodegen', body: Optional['Stmt'], block: 'ir.Block',
              exit_bb: 'ir.Block', ctx: 'FunctionContext') -> bool:
    """Emit `body` into `block`, then jump to `exit_bb` unless the body already returned.

    Returns True when the jump to `exit_bb` was emitted.
    """
    ctx.builder.position_at_end(block)
    if body is not None:
        codegen.statements.emit_stmt(body, ctx)
    if ctx.builder.block.is_terminated:
        return False
    ctx.builder.branch(exit_bb)
    return True
