"""Pattern validation errors and per-clause rules."""

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from timeshift.grammar import Token
    from timeshift.spec import PartDef

# Anchors and the units that accept them
ANCHOR_UNITS = {
    "^": frozenset("W"),
    "$": frozenset("DW"),
}

# Clause magnitudes are 32-bit
MAX_MAGNITUDE = 2**31 - 1


class ValidationError(ValueError):
    """Raised when a shift pattern is rejected.

    Attributes:
        pattern: The trimmed pattern text.
        clause: The offending clause, or "" when the whole pattern is at fault.
    """

    def __init__(self, message: str, pattern: str = "", clause: str = "") -> None:
        super().__init__(message)
        self.pattern = pattern
        self.clause = clause


class PatternSyntaxError(ValidationError):
    """Pattern is not fully covered by unit clauses."""
    pass


class SequenceError(ValidationError):
    """Unit out of order or repeated."""

    def __init__(
        self, message: str, pattern: str = "", clause: str = "", expected: str = ""
    ) -> None:
        super().__init__(message, pattern, clause)
        self.expected = expected


class OptionError(ValidationError):
    """Anchor misuse: wrong unit, combined with a sign, or doubled."""
    pass


class PartValueError(ValidationError):
    """Magnitude outside the domain of its unit."""
    pass


def check_options(token: "Token", pattern: str = "") -> None:
    """Validate the anchor characters of a clause.

    Raises:
        OptionError: If an anchor is not allowed on the unit, an anchor is
            combined with a relative sign, or more than one anchor is given.
    """
    for anchor in token.anchors:
        if token.unit not in ANCHOR_UNITS[anchor]:
            raise OptionError(
                f'illegal option "{anchor}" in "{token.source}"',
                pattern=pattern,
                clause=token.source,
            )

    if token.anchors and token.sign:
        raise OptionError(
            f'"^" and "$" can not be used with relative ("+" or "-") values '
            f'in "{token.source}"',
            pattern=pattern,
            clause=token.source,
        )

    if len(token.anchors) > 1:
        if set(token.anchors) == {"^", "$"}:
            message = f'"^" and "$" can not be used simultaneously in "{token.source}"'
        else:
            message = f'repeated anchor in "{token.source}"'
        raise OptionError(message, pattern=pattern, clause=token.source)


def _check_month(part: "PartDef") -> str | None:
    if part.absolute and part.value == 0:
        return "illegal month"
    return None


def _check_day(part: "PartDef") -> str | None:
    if part.absolute and part.value == 0:
        return "illegal day"
    return None


def _check_week(part: "PartDef") -> str | None:
    # Relative weeks may be zero: no shift, weekday still resolved
    if part.value != 0:
        return None
    if part.anchored:
        return "illegal anchored week"
    if part.absolute:
        return "illegal absolute week"
    return None


def _check_weekday(part: "PartDef") -> str | None:
    # 0 - Sunday
    if not 0 <= part.value <= 6:
        return "illegal weekday"
    return None


_VALUE_RULES: dict[str, Callable[["PartDef"], str | None]] = {
    "M": _check_month,
    "D": _check_day,
    "W": _check_week,
    "w": _check_weekday,
}


def check_value(token: "Token", part: "PartDef", pattern: str = "") -> None:
    """Validate the magnitude of a clause against its unit's domain.

    Raises:
        PartValueError: If the value is out of range for the unit.
    """
    if token.magnitude > MAX_MAGNITUDE:
        raise PartValueError(
            f'value out of range in "{token.source}"',
            pattern=pattern,
            clause=token.source,
        )

    rule = _VALUE_RULES.get(token.unit)
    if rule is None:
        return
    problem = rule(part)
    if problem is not None:
        raise PartValueError(
            f'{problem} in "{token.source}"', pattern=pattern, clause=token.source
        )
