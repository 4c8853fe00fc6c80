## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from functools import cache

import lark
from .types import source_line
from .errors import FluxoParseError, FluxoIncompleteParse


# Only statement headers have a grammar; expressions are matched by shape in `evaluator`.
GRAMMAR = r"""
local_declaration: "local" NAME "=" REST
export_header: "export" "function" NAME "(" PARAMS? ")" REST?

NAME: /\w+/
PARAMS: /[^)\s][^)]*/
REST: /\S.*/

%import common.WS_INLINE
%ignore WS_INLINE
"""


@cache
def _header_parser() -> lark.Lark:
    return lark.Lark(GRAMMAR, start=['local_declaration', 'export_header'], parser="lalr", lexer="contextual")


def _parse_header(text: str, start: str, message: str, filename=None) -> list[lark.Token]:
    try:
        tree = _header_parser().parse(text.strip(), start=start)
    except lark.exceptions.UnexpectedInput as exc:
        raise FluxoParseError(f"{message}: {text.strip()}", fluxo_line=text, filename=filename,
                              column=getattr(exc, 'column', None), token=text.strip()) from None
    return [ch for ch in tree.children if isinstance(ch, lark.Token)]


def parse_local_declaration(line: str, filename=None) -> tuple[str, str]:
    """Split `local <name> = <expression>` into its name and expression text."""
    tokens = _parse_header(line, 'local_declaration', "Invalid local declaration", filename)
    return tokens[0].value, tokens[1].value


def parse_export_header(line: str, filename=None) -> tuple[str, list[str]]:
    tokens = _parse_header(line, 'export_header', "Invalid export function", filename)
    name = tokens[0].value
    raw = next((t.value for t in tokens if t.type == 'PARAMS'), '')
    return name, [p.strip() for p in raw.split(',') if p.strip()]


def normalize_lines(text: str) -> list[source_line]:
    lines = []
    for lineno, line in enumerate(text.split('\n'), start=1):
        trimmed = line.strip()
        if trimmed and not trimmed.startswith('//'):
            lines.append(source_line(line, lineno))
    return lines


def scan_block(lines: list[str], start: int) -> tuple[str, int]:
    """Collect the `{ ... }` block that opens at or after `lines[start]`.

    Every brace counts, including those inside string literals.  Returns the literal
    block text and how many lines (from `start`) it took, or `("", 0)` if the input
    runs out before the braces balance.
    """
    depth, found, block = 0, False, []
    for i in range(start, len(lines)):
        line = lines[i]
        for ch in line:
            if ch == '{':
                depth += 1
                found = True
            elif ch == '}':
                depth -= 1
        if found:
            block.append(line)
            if depth == 0:
                return '\n'.join(block) + '\n', i - start + 1
    return '', 0


def require_block(lines: list[str], start: int, filename=None) -> tuple[str, int]:
    block, consumed = scan_block(lines, start)
    if consumed == 0:
        head = lines[start]
        raise FluxoIncompleteParse(f"Unterminated block starting at: {head.strip()}",
                                   fluxo_line=head, filename=filename, token='{')
    return block, consumed


def block_inner(block: str) -> str:
    first, last = block.find('{'), block.rfind('}')
    if first == -1 or last == -1: return ''
    return block[first+1:last].strip()


def format_parse_error_context(filename, line, token_value, source=None):
    lines = source.splitlines(keepends=True) if source else open(filename, 'r').readlines()
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]

    for i in range(start_line, end_line):
        line_content = lines[i].rstrip('\n')
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            if token_value and (column := line_content.find(token_value)) >= 0:
                line_content = (
                    line_content[:column] +
                    f"\033[48;5;30m\033[1;97m{token_value}\033[0m" +
                    line_content[column+len(token_value):]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'
