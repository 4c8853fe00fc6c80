## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .types import ExportedFunction
from .context import ExecutionContext
from .parser import parse_export_header, require_block, block_inner
from .evaluator import evaluate_expression
from .formatting import format_compact
from . import interpreter


INVOCATION_RE = re.compile(r'(\w+)\s*\((.*)\)')
BARE_CALL_RE = re.compile(r'^(\w+)\s*\(([^)]*)\)')


def define_exported_function(ctx: ExecutionContext, lines: list[str], start: int) -> int:
    name, params = parse_export_header(lines[start], filename=ctx.filename)
    body, consumed = require_block(lines, start, filename=ctx.filename)
    ctx.exports[name] = ExportedFunction(name=name, params=params, body=body)
    return consumed


def invoke_exported_function(ctx: ExecutionContext, line: str) -> None:
    """Run an exported function's body against the caller's variables.

    There is no call frame: arguments are not bound to the declared parameters and
    any `local` inside the body overwrites the top-level binding of the same name.
    Calling an unknown function does nothing.
    """
    if not (m := INVOCATION_RE.search(line)) or (func := ctx.exports.get(m.group(1))) is None:
        return

    body_lines = [l for l in block_inner(func.body).split('\n') if l.strip()]
    for index, body_line in enumerate(body_lines):
        stmt = body_line.strip()
        if stmt in ('{', '}'):
            continue

        if stmt.startswith('local '):
            interpreter.execute_local_declaration(ctx, stmt, body_lines, index)
        elif 'sys.log(' in stmt:
            interpreter.execute_log(ctx, stmt)
        elif stmt.startswith('return '):
            value = evaluate_expression(ctx, stmt[len('return '):].strip())
            ctx.emit(f"Return: {format_compact(value)}")
        elif call := BARE_CALL_RE.match(stmt):
            callee, args_text = call.groups()
            args = [ctx.lookup_or_text(a.strip()) for a in args_text.split(',')]
            ctx.emit(f"Called {callee} with: {format_compact(args)}")
