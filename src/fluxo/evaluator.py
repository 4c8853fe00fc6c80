## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from typing import Any

from .context import ExecutionContext
from .errors import FluxoNameError, FluxoTypeError
from .windows import WindowObject, resolve_window_id


WINDOW_ID_RE = re.compile(r'window_Id\(([^)]+)\)')
COLON_CALL_RE = re.compile(r'(\w+)\.(\w+):(\w+)\(([^)]*)\)')
INFO_ARG_RE = re.compile(r'info:\(([^)]*)\)')
FIND_CALL_RE = re.compile(r'(\w+)\.(\w+):find\(([^)]+)\)')


def unquote(text: str) -> str:
    return text.replace('"', '').replace("'", '')

def is_quoted(text: str) -> bool:
    return text.startswith('"') or text.startswith("'")


def evaluate_expression(ctx: ExecutionContext, expr: str) -> Any:
    # Shapes are tried in a fixed order; the first one that matches wins.
    if expr.startswith('window_Id(') and (m := WINDOW_ID_RE.search(expr)):
        return _window_by_pattern(ctx, unquote(m.group(1)).strip())

    if ':' in expr and '(' in expr:
        if m := COLON_CALL_RE.search(expr):
            return _colon_method_call(ctx, *m.groups())
        if '.info:(' not in expr:
            return expr

    if '.info:(' in expr:
        return _info_call(ctx, expr)

    if is_quoted(expr):
        return unquote(expr)

    if expr == 'null':
        return None

    if expr in ctx.variables:
        return ctx.variables[expr]

    return expr


def evaluate_block_content(ctx: ExecutionContext, content: str) -> Any:
    """Value of a `{ ... }` block; only a window library `find` is understood."""
    if ':find(' not in content or not (m := FIND_CALL_RE.search(content)):
        return None
    name, _, arg = m.groups()
    if isinstance(obj := ctx.lookup(name), WindowObject):
        return obj.libary.find(unquote(arg).strip())
    return None


def resolve_variable_path(ctx: ExecutionContext, path: str) -> Any:
    head, *parts = path.split('.')
    current = ctx.lookup(head)
    for part in parts:
        if isinstance(current, dict):
            current = current.get(part)
        elif isinstance(current, list) and part.isdigit():
            current = current[int(part)] if int(part) < len(current) else None
        elif isinstance(current, WindowObject):
            current = current.member(part)
        else:
            return None
    return current


def _window_by_pattern(ctx: ExecutionContext, pattern: str) -> WindowObject:
    if (record := resolve_window_id(ctx.windows, pattern)) is None:
        raise FluxoNameError(f"Window {pattern} not found", fluxo_token=pattern)
    return WindowObject(record)


def _colon_method_call(ctx: ExecutionContext, name: str, prop: str, method: str, args_text: str) -> Any:
    if not isinstance(obj := ctx.lookup(name), WindowObject):
        return None
    if (target := obj.member(prop)) is None or not hasattr(target, 'method'):
        return None
    if (fn := target.method(method)) is None:
        return None

    args = []
    for arg in args_text.split(','):
        arg = arg.strip()
        args.append(unquote(arg) if is_quoted(arg) else ctx.lookup_or_text(arg))
    return fn(*args)


def _info_call(ctx: ExecutionContext, expr: str) -> dict:
    name = expr.split('.')[0]
    if not isinstance(obj := ctx.lookup(name), WindowObject):
        raise FluxoTypeError(f"{name} is not a valid window object", fluxo_token=name)

    m = INFO_ARG_RE.search(expr)
    arg = m.group(1).strip() if m else 'null'
    return obj.info(None if arg == 'null' else ctx.lookup(arg))
