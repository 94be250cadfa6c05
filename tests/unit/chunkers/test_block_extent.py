from __future__ import annotations

from codebase_indexer.chunkers.lexical import find_block_end, strip_literals_and_comments


def test_braces_inside_string_literals_are_ignored() -> None:
    lines = ["function f() {", "  const s = '}';", '  const t = "{";', "}", "const after = 1;"]
    assert find_block_end(lines, 0) == 3


def test_braces_inside_line_comments_are_ignored() -> None:
    lines = ["function f() { // }", "  return 1;", "}"]
    assert find_block_end(lines, 0) == 2


def test_unclosed_block_runs_to_last_line() -> None:
    lines = ["function f() {", "  work();", ""]
    assert find_block_end(lines, 0) == 2


def test_semicolon_before_any_bracket_ends_declaration() -> None:
    lines = ["type Alias = string;", "function g() {", "}"]
    assert find_block_end(lines, 0) == 0


def test_multiline_call_closes_on_paren() -> None:
    lines = ["const value = compute(", "  1,", "  2", ");", "next();"]
    assert find_block_end(lines, 0) == 3


def test_strip_removes_literal_contents_and_comments() -> None:
    stripped = strip_literals_and_comments("const a = 'x{' + \"y}\" + `z(`; // }")
    assert "{" not in stripped
    assert "}" not in stripped
    assert "(" not in stripped
    assert stripped.startswith("const a = ")


def test_strip_removes_single_line_block_comment() -> None:
    assert strip_literals_and_comments("a /* { */ b") == "a  b"
