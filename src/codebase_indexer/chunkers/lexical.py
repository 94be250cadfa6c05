"""Line-level lexical helpers shared by the heuristic chunkers."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

_LITERAL_OR_COMMENT_RE = re.compile(
    r"""'(?:\\.|[^'\\])*'"""
    r'''|"(?:\\.|[^"\\])*"'''
    r"|`(?:\\.|[^`\\])*`"
    r"|/\*.*?\*/"
    r"|//.*$"
)
_IMPORT_FROM_RE = re.compile(r"""import\s+[^;'"]*?\s+from\s+['"](.+?)['"]""")
_EXPORT_RE = re.compile(r"export\s+(?:default\s+)?(?:function|const|class|interface|type)\s+(\w+)")
_MARKUP_OPEN_RE = re.compile(r"<\w")
_HOOK_CALL_RE = re.compile(r"use[A-Z]")
_STYLE_ATTRIBUTE = "className"
_COMPLEXITY_PATTERNS = (
    re.compile(r"if\s*\("),
    re.compile(r"else\s"),
    re.compile(r"for\s*\("),
    re.compile(r"while\s*\("),
    re.compile(r"switch\s*\("),
    re.compile(r"\?\s*\w"),
    re.compile(r"&&"),
    re.compile(r"\|\|"),
    re.compile(r"catch\s*\("),
)


@dataclass(slots=True)
class BracketCounters:
    """Independent signed depth counters for one block scan."""

    brace: int = 0
    paren: int = 0
    bracket: int = 0
    started: bool = False

    def feed(self, text: str) -> None:
        """Update counters from already-stripped text."""
        for char in text:
            if char == "{":
                self.brace += 1
                self.started = True
            elif char == "}":
                self.brace -= 1
            elif char == "(":
                self.paren += 1
                self.started = True
            elif char == ")":
                self.paren -= 1
            elif char == "[":
                self.bracket += 1
                self.started = True
            elif char == "]":
                self.bracket -= 1

    @property
    def closed(self) -> bool:
        """Return True once the block started and every counter is back to <= 0."""
        return self.started and self.brace <= 0 and self.paren <= 0 and self.bracket <= 0


def strip_literals_and_comments(line: str) -> str:
    """Drop string/template literal contents and comments from a single line.

    One left-to-right pass with no nesting; literals spanning several lines are
    not recognized.
    """
    return _LITERAL_OR_COMMENT_RE.sub("", line)


def find_block_end(lines: Sequence[str], start_line: int) -> int:
    """Return the 0-based inclusive last line of the block starting at start_line.

    A declaration terminated by ';' before any bracket opens ends on that line.
    Without a balancing close the block runs to the last line.
    """
    counters = BracketCounters()
    for index in range(start_line, len(lines)):
        cleaned = strip_literals_and_comments(lines[index])
        counters.feed(cleaned)
        if counters.closed:
            return index
        if not counters.started and cleaned.rstrip().endswith(";"):
            return index
    return max(start_line, len(lines) - 1)


def extract_dependencies(content: str) -> tuple[str, ...]:
    """Return module specifiers of import ... from '<module>' statements."""
    return tuple(match.group(1) for match in _IMPORT_FROM_RE.finditer(content))


def extract_exports(content: str) -> tuple[str, ...]:
    """Return names declared with an export keyword."""
    return tuple(match.group(1) for match in _EXPORT_RE.finditer(content))


def has_markup(content: str) -> bool:
    """Return True when content looks like it contains markup tags."""
    return _MARKUP_OPEN_RE.search(content) is not None and ">" in content


def has_hook_calls(content: str) -> bool:
    """Return True when content mentions a hook-style identifier."""
    return _HOOK_CALL_RE.search(content) is not None


def has_style_attribute(content: str) -> bool:
    """Return True when content uses the class-name styling attribute."""
    return _STYLE_ATTRIBUTE in content


def estimate_complexity(content: str) -> int:
    """Additive McCabe-style estimate: 1 + branch and boolean operator occurrences."""
    complexity = 1
    for pattern in _COMPLEXITY_PATTERNS:
        complexity += len(pattern.findall(content))
    return complexity
