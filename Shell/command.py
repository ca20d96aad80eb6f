"""
Command tree built by the parser and consumed by the executor.

A tree node is either a SimpleCommand (one program with its redirections)
or a ComplexCommand (an operator joining two subtrees).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

PIPE = "|"


class Builtin(Enum):
    NONE = "none"
    EXIT = "exit"
    CD = "cd"


BUILTIN_NAMES = {
    "exit": Builtin.EXIT,
    "cd": Builtin.CD,
}


def classify(tokens):
    """Builtin tag for a token list (by its first word)."""
    if not tokens:
        return Builtin.NONE
    return BUILTIN_NAMES.get(tokens[0], Builtin.NONE)


@dataclass
class SimpleCommand:
    tokens: List[str]
    infile: Optional[str] = None
    outfile: Optional[str] = None
    errfile: Optional[str] = None
    builtin: Builtin = field(default=None)

    def __post_init__(self):
        if self.builtin is None:
            self.builtin = classify(self.tokens)

    @property
    def is_simple(self):
        return True

    def describe(self, depth=0):
        pad = "  " * depth
        lines = [f"{pad}simple: {' '.join(self.tokens)}"]
        if self.builtin is not Builtin.NONE:
            lines.append(f"{pad}  builtin: {self.builtin.value}")
        for label, path in (("in", self.infile), ("out", self.outfile), ("err", self.errfile)):
            if path is not None:
                lines.append(f"{pad}  {label}: {path}")
        return "\n".join(lines)


@dataclass
class ComplexCommand:
    oper: str
    cmd1: "Command"
    cmd2: "Command"

    def __post_init__(self):
        if self.cmd1 is None or self.cmd2 is None:
            raise ValueError(f"operator '{self.oper}' needs two commands")

    @property
    def is_simple(self):
        return False

    def describe(self, depth=0):
        pad = "  " * depth
        return "\n".join([
            f"{pad}complex: {self.oper}",
            self.cmd1.describe(depth + 1),
            self.cmd2.describe(depth + 1),
        ])


Command = Union[SimpleCommand, ComplexCommand]
