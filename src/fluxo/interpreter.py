## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .context import ExecutionContext
from .parser import parse_local_declaration, require_block, block_inner
from .evaluator import (evaluate_expression, evaluate_block_content, resolve_variable_path,
                        is_quoted, unquote, COLON_CALL_RE)
from .formatting import format_item, show_statement
from . import functions


LOG_CALL_RE = re.compile(r'sys\.log\s*\(([^)]+)\)')
CALL_NAME_RE = re.compile(r'(\w+)\s*\(')


def execute_local_declaration(ctx: ExecutionContext, line: str, lines: list[str], index: int) -> int:
    """Bind `local <name> = <expr>` and return how many lines the statement used."""
    name, expression = parse_local_declaration(line, filename=ctx.filename)

    if '{' in expression:
        block, consumed = require_block(lines, index, filename=ctx.filename)
        ctx.variables[name] = evaluate_block_content(ctx, block_inner(block))
        return consumed

    ctx.variables[name] = evaluate_expression(ctx, expression.strip())
    return 1


def execute_log(ctx: ExecutionContext, line: str) -> None:
    if not (m := LOG_CALL_RE.search(line)):
        return

    rendered = []
    for arg in m.group(1).split(','):
        arg = arg.strip()
        if is_quoted(arg):
            rendered.append(unquote(arg))
            continue
        value = ctx.lookup(arg)
        if value is None or value == '':
            value = resolve_variable_path(ctx, arg)
        rendered.append(format_item(value) if value is not None else unquote(arg))
    ctx.emit(' '.join(rendered))


def is_exported_call(ctx: ExecutionContext, line: str) -> bool:
    return (m := CALL_NAME_RE.search(line)) is not None and m.group(1) in ctx.exports


def interpret(ctx: ExecutionContext, lines: list[str], verbosity=0, stats=None) -> list[str]:
    def is_notable(line):
        return line.startswith(('local ', 'export function ')) and '{' in line or is_exported_call(ctx, line)

    i, step = 0, 0
    while i < len(lines):
        line = lines[i].strip()
        if verbosity == 2 or (verbosity == 1 and is_notable(line)):
            show_statement(step, line, ctx.output)
        step += 1

        if line.startswith('local '):
            i += execute_local_declaration(ctx, lines[i], lines, i)
        elif line.startswith('export function '):
            i += functions.define_exported_function(ctx, lines, i)
        elif 'sys.log(' in line:
            execute_log(ctx, line)
            i += 1
        elif is_exported_call(ctx, line):
            functions.invoke_exported_function(ctx, line)
            i += 1
        elif ':' in line and COLON_CALL_RE.search(line):
            # Method calls as statements, e.g. `w.database:write("k", "v")`; result dropped.
            evaluate_expression(ctx, line)
            i += 1
        else:
            i += 1

    if stats is not None:
        stats['statements'] = stats.get('statements', 0) + step
    return ctx.output
