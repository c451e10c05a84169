"""Shift specification model and the builder that validates clauses into it."""

from dataclasses import dataclass

from timeshift.grammar import Token
from timeshift.validation import SequenceError, check_options, check_value

# Units in the only order a pattern may list them
UNIT_ORDER = "YMDWwhmslun"
SUBSECOND_UNITS = "lun"

UNIT_FIELDS = {
    "Y": "year",
    "M": "month",
    "D": "day",
    "W": "week",
    "w": "weekday",
    "h": "hour",
    "m": "minute",
    "s": "second",
    "l": "millisecond",
    "u": "microsecond",
    "n": "nanosecond",
}


@dataclass(frozen=True)
class PartDef:
    """Adjustment for a single calendar unit.

    Absolute parts set the field to ``value``; relative parts add it.
    Anchors are only ever set on absolute parts.
    """

    active: bool = False
    value: int = 0
    absolute: bool = True
    from_begin: bool = False  # week only
    from_end: bool = False  # day and week only

    @property
    def anchored(self) -> bool:
        return self.from_begin or self.from_end

    def to_clause(self, unit: str) -> str:
        """Render this part back into clause text, e.g. "D$1" or "h-6"."""
        anchor = "^" if self.from_begin else "$" if self.from_end else ""
        if self.absolute:
            return f"{unit}{anchor}{self.value}"
        return f"{unit}{'-' if self.value < 0 else '+'}{abs(self.value)}"


INACTIVE = PartDef()


@dataclass(frozen=True)
class ShiftSpec:
    """Validated, immutable result of parsing one pattern.

    ``empty`` marks the identity transform produced by a blank pattern.
    """

    empty: bool = False
    year: PartDef = INACTIVE
    month: PartDef = INACTIVE
    day: PartDef = INACTIVE
    week: PartDef = INACTIVE
    weekday: PartDef = INACTIVE
    hour: PartDef = INACTIVE
    minute: PartDef = INACTIVE
    second: PartDef = INACTIVE
    millisecond: PartDef = INACTIVE
    microsecond: PartDef = INACTIVE
    nanosecond: PartDef = INACTIVE

    def part(self, unit: str) -> PartDef:
        """Get the part for a unit letter."""
        return getattr(self, UNIT_FIELDS[unit])

    def to_pattern(self) -> str:
        """Render the canonical pattern text ("" for the identity)."""
        return " ".join(
            self.part(unit).to_clause(unit)
            for unit in UNIT_ORDER
            if self.part(unit).active
        )

    def __str__(self) -> str:
        return self.to_pattern()


EMPTY_SHIFT = ShiftSpec(empty=True)


def _make_part(token: Token) -> PartDef:
    value = token.magnitude
    if token.sign == "-":
        value = -value
    return PartDef(
        active=True,
        value=value,
        absolute=not token.sign,
        from_begin="^" in token.anchors,
        from_end="$" in token.anchors,
    )


def build(tokens: list[Token], pattern: str = "", subsecond: bool = True) -> ShiftSpec:
    """Validate clauses left to right and assemble a ShiftSpec.

    Args:
        tokens: Clauses from ``tokenize``.
        pattern: Original pattern text, used in error messages.
        subsecond: Whether the l, u and n units are accepted.

    Returns:
        The assembled spec, or EMPTY_SHIFT when there are no clauses.

    Raises:
        SequenceError: If a unit is out of order or repeated. Its
            ``expected`` holds the units still allowed at that clause.
        OptionError: If an anchor is misused.
        PartValueError: If a value is outside its unit's domain.
    """
    if not tokens:
        return EMPTY_SHIFT

    order = UNIT_ORDER if subsecond else UNIT_ORDER[: -len(SUBSECOND_UNITS)]
    cursor = 0
    parts: dict[str, PartDef] = {}

    for token in tokens:
        remaining = order[cursor:]
        while cursor < len(order) and order[cursor] != token.unit:
            cursor += 1
        if cursor >= len(order):
            raise SequenceError(
                f'wrong sequence of parts in "{pattern}" (about "{token.source}"), '
                f'expected one of "{remaining}" in the order "{order}"',
                pattern=pattern,
                clause=token.source,
                expected=remaining,
            )
        cursor += 1

        check_options(token, pattern)
        part = _make_part(token)
        check_value(token, part, pattern)
        parts[UNIT_FIELDS[token.unit]] = part

    return ShiftSpec(**parts)
