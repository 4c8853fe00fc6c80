## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import json


def _structure(it):
    # Capability objects render as their data members only, like JSON drops functions.
    if hasattr(it, 'as_structure'): return it.as_structure()
    raise TypeError(f"Object of type {type(it).__name__} is not renderable.")

def is_structural(it) -> bool:
    return isinstance(it, (dict, list)) or hasattr(it, 'as_structure')

def format_item(it) -> str:
    """Render a value for `sys.log`: structures as indented JSON, primitives as text."""
    if is_structural(it):
        return json.dumps(it, indent=2, ensure_ascii=False, default=_structure)
    if it is None: return 'null'
    if isinstance(it, bool): return str(it).lower()
    if callable(it): return f'[Function: {getattr(it, "__name__", "anonymous")}]'
    return str(it)

def format_compact(it) -> str:
    """Single-line rendering used by `return` and call transcripts."""
    if it is None or is_structural(it):
        return json.dumps(it, separators=(',', ':'), ensure_ascii=False, default=_structure)
    return format_item(it)


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))

def show_statement(step: int, line: str, output: list[str], width=72):
    text = line.strip()
    if len(text) > width:
        text = text[:width-2] + ' …'
    print(f"\033[90m{step:>3} :\033[0m  {text:<{width}} \033[36m <=> \033[0m {len(output)}")
