"""Script parser — line splitting and statement classification.

Responsibilities
----------------
- Split script text into raw source lines
- Classify one trimmed line into an ast_nodes variant (case-insensitive
  keywords, case-sensitive variable names)
- Locate the END that closes an IF / DO block by depth counting

Block structure is never built into a tree: the runner walks the flat line
list with a cursor and uses find_block_end() to skip or repeat a block.
"""
from __future__ import annotations

import re

from src.core.prefix import (
    LINE_COMMENT_PREFIX, BLOCK_COMMENT_OPEN,
)
from src.core.ast_nodes import (
    Node, SayNode, AddressNode, AssignNode, IfNode, DoNode,
    EndNode, CommentNode, UnknownNode,
)

# Keywords that open a block closed by END
BLOCK_OPENERS = frozenset({"IF", "DO"})

_KEYWORD_RE = re.compile(r"^([A-Za-z_]\w*)")
_ADDRESS_RE = re.compile(r'^ADDRESS\s+(SLIDES)\s+"([^"]+)"', re.IGNORECASE)
_ASSIGN_RE  = re.compile(r"^(\w+)\s*=\s*(.+)$")
_IF_RE      = re.compile(r"^IF\s+(.+?)\s+THEN\b", re.IGNORECASE)
_DO_RE      = re.compile(r"^DO\s+(\w+)\s*=\s*(.+?)\s+TO\s+(.+?)\s*$", re.IGNORECASE)

# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def split_lines(text: str) -> list[str]:
    """Split script text into raw (untrimmed) source lines."""
    return text.split("\n")


def keyword(line: str) -> str:
    """Return the upper-cased leading word of ``line`` ('' if none)."""
    m = _KEYWORD_RE.match(line.strip())
    return m.group(1).upper() if m else ""


def classify(line: str, line_num: int = 0) -> Node:
    """Classify one trimmed source line.

    Order matters: SAY and ADDRESS are recognised before assignment, so
    ``SAY = 1`` is an output statement, not an assignment.
    """
    if line.startswith(LINE_COMMENT_PREFIX):
        return CommentNode(line_num=line_num)
    if line.startswith(BLOCK_COMMENT_OPEN):
        return CommentNode(block=True, line_num=line_num)

    kw = keyword(line)

    if kw == "SAY":
        return SayNode(expr=line[3:].strip(), line_num=line_num)

    if kw == "ADDRESS":
        m = _ADDRESS_RE.match(line)
        if m:
            return AddressNode(address=m.group(1).upper(), command=m.group(2),
                               line_num=line_num)
        return UnknownNode(text=line, line_num=line_num)

    m = _ASSIGN_RE.match(line)
    if m:
        return AssignNode(var_name=m.group(1), expr=m.group(2), line_num=line_num)

    if kw == "IF":
        m = _IF_RE.match(line)
        if m:
            return IfNode(condition=m.group(1), line_num=line_num)
        return UnknownNode(text=line, line_num=line_num)

    if kw == "DO":
        m = _DO_RE.match(line)
        if m:
            return DoNode(var_name=m.group(1), start_expr=m.group(2),
                          end_expr=m.group(3), line_num=line_num)
        return UnknownNode(text=line, line_num=line_num)

    if kw == "END":
        return EndNode(line_num=line_num)

    return UnknownNode(text=line, line_num=line_num)


def find_block_end(lines: list[str], start: int, stop: int) -> int:
    """Return the index of the END closing the block whose body starts at
    ``start``, searching no further than ``stop``.

    IF and DO lines open a level, END lines close one.  Returns ``stop``
    when the block is never closed.  Keywords inside string literals or
    comments are counted too.
    """
    depth = 1
    pos = start
    while pos < stop:
        kw = keyword(lines[pos])
        if kw in BLOCK_OPENERS:
            depth += 1
        elif kw == "END":
            depth -= 1
            if depth == 0:
                return pos
        pos += 1
    return stop
