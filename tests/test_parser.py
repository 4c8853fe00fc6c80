## fluxo — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark
import pytest

from fluxo import parser
from fluxo.errors import FluxoParseError, FluxoIncompleteParse


def test_normalize_drops_blank_and_comment_lines():
    src = "  local x = 1\n\n// comment\n   // indented comment\n\t\nsys.log(x)"
    lines = parser.normalize_lines(src)
    assert lines == ["  local x = 1", "sys.log(x)"]
    assert [l.lineno for l in lines] == [1, 6]


def test_normalize_keeps_inner_slashes():
    lines = parser.normalize_lines('sys.log("http://example")')
    assert lines == ['sys.log("http://example")']


def test_scan_block_same_line_as_statement():
    lines = ['local a = {', '  w.library:find("x")', '}', 'sys.log(a)']
    block, consumed = parser.scan_block(lines, 0)
    assert consumed == 3
    assert block == 'local a = {\n  w.library:find("x")\n}\n'


def test_scan_block_opening_on_later_line():
    lines = ['export function f()', '{', '  sys.log("a")', '}', 'f()']
    block, consumed = parser.scan_block(lines, 0)
    assert consumed == 4
    assert block.startswith('{')


def test_scan_block_nested_braces():
    lines = ['x = {', '  {', '  }', '}', 'after']
    _, consumed = parser.scan_block(lines, 0)
    assert consumed == 4


def test_scan_block_single_line():
    _, consumed = parser.scan_block(['export function g() { sys.log("hi") }', 'g()'], 0)
    assert consumed == 1


def test_scan_block_unbalanced_returns_empty():
    assert parser.scan_block(['local a = {', 'sys.log("a")'], 0) == ('', 0)


def test_scan_block_counts_braces_inside_strings():
    # A `}` inside a string literal closes the block early.
    lines = ['local a = {', '  sys.log("}")', '  more', '}']
    _, consumed = parser.scan_block(lines, 0)
    assert consumed == 2


def test_require_block_raises_incomplete_parse():
    lines = parser.normalize_lines('\nlocal a = {\n  w.library:find("x")\n')
    with pytest.raises(FluxoIncompleteParse) as exc:
        parser.require_block(lines, 0)
    assert isinstance(exc.value, lark.exceptions.ParseError)
    assert exc.value.line == 2


def test_block_inner():
    assert parser.block_inner('{\n  a\n  b\n}\n') == 'a\n  b'
    assert parser.block_inner('header { x }') == 'x'
    assert parser.block_inner('no braces here') == ''


def test_parse_local_declaration():
    assert parser.parse_local_declaration('local x = "hello"') == ('x', '"hello"')
    assert parser.parse_local_declaration('  local  y=window_Id("a")') == ('y', 'window_Id("a")')
    assert parser.parse_local_declaration('local s = {') == ('s', '{')


@pytest.mark.parametrize("line", ['local = 5', 'local x', 'local x =', 'local a.b = 1'])
def test_parse_local_declaration_rejects_malformed(line):
    with pytest.raises(FluxoParseError) as exc:
        parser.parse_local_declaration(line)
    assert str(exc.value) == f"Invalid local declaration: {line}"


def test_parse_export_header():
    assert parser.parse_export_header('export function greet() {') == ('greet', [])
    assert parser.parse_export_header('export function add(a, b)') == ('add', ['a', 'b'])
    assert parser.parse_export_header('export function f( x ,, y ) { }') == ('f', ['x', 'y'])


def test_parse_export_header_rejects_missing_name():
    with pytest.raises(FluxoParseError, match="Invalid export function"):
        parser.parse_export_header('export function (x) {')


def test_format_parse_error_context_highlights_token():
    source = "sys.log(\"a\")\nlocal = 1\nsys.log(\"b\")\n"
    text = parser.format_parse_error_context('<test>', 2, 'local = 1', source=source)
    assert 'File "<test>", line 2' in text
    assert 'local = 1' in text
    assert '    1 |' in text and '    3 |' in text
