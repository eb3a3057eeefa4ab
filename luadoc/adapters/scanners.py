"""
luadoc/adapters/scanners.py

Line cursor plus the two forward scans the adapter runs on un-parsed text:

  scan_enum_body()       → enum values following an ``---@enum`` block
  has_return_statement() → "does this function return something?" lookahead

The source is materialised as a list of lines up front; a read position is a
plain integer, so a lookahead saves it with ``mark()`` and puts it back with
``reset()``.
"""

from __future__ import annotations

from typing import List, Optional

from luadoc.adapters.doc_block import interpret_block
from luadoc.adapters.patterns import ENUM_VALUE, RETURN, STRING_LITERAL
from luadoc.config import ANY_TYPE, DOC_COMMENT_MARKER, INLINE_COMMENT_MARKER
from luadoc.doc.builders import ClassBuilder, FieldBuilder


class LineCursor:
    """Indexable line source with an explicit read position."""

    def __init__(self, text: str) -> None:
        self._lines: List[str] = text.splitlines()
        self.position = 0

    def readline(self) -> Optional[str]:
        if self.position >= len(self._lines):
            return None
        line = self._lines[self.position]
        self.position += 1
        return line

    def mark(self) -> int:
        return self.position

    def reset(self, mark: int) -> None:
        self.position = mark


def strip_inline_comment(code: str) -> str:
    idx = code.find(INLINE_COMMENT_MARKER)
    if idx >= 0:
        code = code[:idx]
    return code.strip()


# ---------------------------------------------------------------------------
# Enum bodies
# ---------------------------------------------------------------------------

def _enum_value(line: str, pending_types: List[str], enum: ClassBuilder) -> None:
    """
    Turn one value line (``RED = 1, -- red``) into a field of the enum.
    A buffered ``---@type`` comment supplies type/description, then is dropped.
    """
    clean = line
    if "," in clean:
        clean = clean[:clean.index(",")]
    clean = strip_inline_comment(clean)

    m = ENUM_VALUE.search(clean)
    if not m:
        return

    value = FieldBuilder(name=m.group(1), type=ANY_TYPE, is_static=False)
    if pending_types:
        type_block = interpret_block(pending_types)
        if type_block.type_decl is not None:
            value.type = type_block.type_decl.type
            value.description = type_block.type_decl.description
        pending_types.clear()

    enum.add_field(value.build())


def _after_brace(line: str) -> str:
    return line[line.index("{") + 1:].strip()


def _brace_delta(code: str) -> int:
    """Net ``{`` minus ``}`` in code, ignoring string literals and inline comments."""
    code = strip_inline_comment(STRING_LITERAL.sub('""', code))
    return code.count("{") - code.count("}")


def scan_enum_body(cursor: LineCursor, enum: ClassBuilder, first_line: str) -> None:
    """
    Collect enum values starting at ``first_line`` (the code line right after
    the doc block), reading further lines from ``cursor`` until the closing
    brace. Lines read here are consumed.

    Braces are counted per line, so table-valued entries (``RED = { 255, 0, 0 },``)
    and values spanning several lines do not end the scan. Only lines that
    start at depth zero are value lines.
    """
    pending_types: List[str] = []
    depth: Optional[int] = None       # None until the opening brace is seen

    def value_line(code: str, level: int) -> Optional[int]:
        # returns the depth after this line, or None once the enum is closed
        if level == 0:
            _enum_value(code, pending_types, enum)
        level += _brace_delta(code)
        return level if level >= 0 else None

    def enter(line: str) -> Optional[int]:
        rest = _after_brace(line)
        if rest and not rest.startswith(INLINE_COMMENT_MARKER):
            return value_line(rest, 0)
        return 0

    if "{" in first_line:
        depth = enter(first_line)
        if depth is None:
            return

    while True:
        line = cursor.readline()
        if line is None:
            return
        trimmed = line.strip()

        if depth is None:
            if "{" in trimmed:
                depth = enter(trimmed)
                if depth is None:
                    return
            elif trimmed.startswith("}"):
                return
            continue

        if depth == 0 and trimmed.startswith("}"):
            return

        if trimmed.startswith(DOC_COMMENT_MARKER + "@type"):
            if depth == 0:
                pending_types.append(trimmed)
        elif trimmed.startswith(INLINE_COMMENT_MARKER):
            continue
        elif trimmed:
            depth = value_line(trimmed, depth)
            if depth is None:
                return


# ---------------------------------------------------------------------------
# Return lookahead
# ---------------------------------------------------------------------------

def has_return_statement(cursor: LineCursor, function_line: str) -> bool:
    """
    Heuristic: does the function declared on ``function_line`` return a value?

    Reads forward from the cursor until the ``end`` that closes the function
    (a counter bumped by lines starting with ``function``) and looks for a
    ``return <expr>``. Control blocks (if/for/while/do) also close with
    ``end`` and are not counted, so a nested block can end the scan early.

    The cursor is always restored: the caller's next read is the line right
    after the declaration.
    """
    found = False

    declaration = strip_inline_comment(function_line)
    idx = declaration.find("function")
    if idx >= 0 and RETURN.search(declaration[idx:]):
        found = True

    mark = cursor.mark()
    try:
        depth = 1
        while True:
            line = cursor.readline()
            if line is None:
                break
            trimmed = line.strip()
            if trimmed.startswith(INLINE_COMMENT_MARKER):
                continue

            code = strip_inline_comment(trimmed)
            if code.startswith("function"):
                depth += 1
            elif code == "end":
                depth -= 1
                if depth == 0:
                    break

            if RETURN.search(code):
                found = True
    finally:
        cursor.reset(mark)

    return found
