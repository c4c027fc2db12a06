"""Ground atoms of the form ``predicate(arg1, arg2, ...)``.

Atoms are compared as normalized strings. ``Atom`` is the structured form for
callers that build atoms from data instead of text.
"""

import re
from typing import NamedTuple, Optional, Tuple

ATOM_PATTERN = re.compile(r"^\s*([^()]+?)\s*\((.*)\)\s*$", re.DOTALL)


class Atom(NamedTuple):
    predicate: str
    args: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> Optional["Atom"]:
        """Split ``pred(a, b)`` into its parts; None for flat atoms."""
        match = ATOM_PATTERN.match(text)
        if not match:
            return None
        predicate, raw_args = match.group(1), match.group(2)
        args = tuple(arg.strip() for arg in raw_args.split(",")) if raw_args.strip() else ()
        return cls(predicate.strip(), args)

    def __str__(self) -> str:
        return f"{self.predicate}({', '.join(self.args)})"


def atom(predicate: str, *args: str) -> str:
    return str(Atom(predicate.strip(), tuple(str(a).strip() for a in args)))


def normalize_atom(text: str) -> str:
    parsed = Atom.parse(text)
    if parsed is None:
        return text.strip()
    return str(parsed)
