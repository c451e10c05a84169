"""Scanner that splits a shift pattern into unit clauses."""

import re
from typing import NamedTuple

from timeshift.validation import PatternSyntaxError

# One clause: unit letter, anchor run, optional sign, digits.
# The anchor run is matched greedily so doubled anchors reach the
# option checks instead of failing here.
_CLAUSE_RE = re.compile(r"\s*([YMDWwhmslun])([\^$]*)([+-]?)([0-9]+)\s*")


class Token(NamedTuple):
    """A single unit clause as written in the pattern."""

    source: str  # clause text without surrounding whitespace
    unit: str
    anchors: str
    sign: str
    digits: str

    @property
    def magnitude(self) -> int:
        return int(self.digits)


def tokenize(pattern: str) -> list[Token]:
    """Split a pattern into clauses, requiring the whole text to be covered.

    Args:
        pattern: Pattern text such as "Y+1 M2 D$1 h6".

    Returns:
        Clauses in the order they appear. A blank pattern yields an
        empty list.

    Raises:
        PatternSyntaxError: If any character is not part of a clause.
    """
    text = pattern.strip()
    tokens = []
    pos = 0
    while pos < len(text):
        match = _CLAUSE_RE.match(text, pos)
        if match is None:
            raise PatternSyntaxError(f'illegal pattern "{text}"', pattern=text)
        unit, anchors, sign, digits = match.groups()
        tokens.append(
            Token(
                source=match.group(0).strip(),
                unit=unit,
                anchors=anchors,
                sign=sign,
                digits=digits,
            )
        )
        pos = match.end()
    return tokens
