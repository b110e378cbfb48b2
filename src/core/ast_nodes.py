"""Statement dataclasses for the slides script language.

Every source line is classified exactly once by parser.classify() into one
of these variants; runner.py interprets the variant instead of re-testing
string prefixes.

Leaf statements
---------------
SayNode      — SAY expression
AddressNode  — ADDRESS SLIDES "command text"
AssignNode   — name = expression
EndNode      — END (closes an IF or DO block; a no-op when executed)
CommentNode  — -- line comment  /  /* block comment */
UnknownNode  — anything else; skipped without error

Block openers
-------------
IfNode       — IF condition THEN
DoNode       — DO var = start TO end
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass
class SayNode:
    expr:     str
    line_num: int = 0       # 0-based source line for log messages


@dataclass
class AddressNode:
    """ADDRESS <address> "<command>" — route a command to a subsystem."""
    address:  str
    command:  str
    line_num: int = 0


@dataclass
class AssignNode:
    var_name: str
    expr:     str
    line_num: int = 0


@dataclass
class IfNode:
    condition: str
    line_num:  int = 0


@dataclass
class DoNode:
    """DO var = start TO end — inclusive counted loop.

    start_expr / end_expr are kept as raw text and evaluated when the loop
    is entered, so bounds may reference variables.
    """
    var_name:   str
    start_expr: str
    end_expr:   str
    line_num:   int = 0


@dataclass
class EndNode:
    line_num: int = 0


@dataclass
class CommentNode:
    """block : opened with /* rather than --; runs to the first later line
    containing */, even when the opening line closes itself
    """
    block:    bool = False
    line_num: int = 0


@dataclass
class UnknownNode:
    text:     str
    line_num: int = 0


# Convenience union type (for type hints only; use isinstance() at runtime)
Node = Union[
    SayNode, AddressNode, AssignNode, IfNode, DoNode,
    EndNode, CommentNode, UnknownNode,
]
