"""Public parse/apply entry points."""

from typing import Any

from timeshift.config import get_timeshift_config
from timeshift.evaluator import apply
from timeshift.grammar import tokenize
from timeshift.logging import get_logger, timed_block
from timeshift.memory_cache import ShiftCache
from timeshift.spec import EMPTY_SHIFT, ShiftSpec, build
from timeshift.validation import ValidationError

_log = get_logger(__name__)


def _build(pattern: str, subsecond: bool) -> ShiftSpec:
    try:
        with timed_block(_log, "pattern_built", pattern=pattern) as fields:
            spec = build(tokenize(pattern), pattern, subsecond=subsecond)
            fields["canonical"] = spec.to_pattern()
    except ValidationError as exc:
        _log.debug(
            "pattern_rejected",
            pattern=pattern,
            error=type(exc).__name__,
            clause=exc.clause,
        )
        raise
    return spec


def parse(
    pattern: str,
    cache: ShiftCache | None = None,
    *,
    subsecond: bool | None = None,
) -> ShiftSpec:
    """Parse a shift pattern.

    Args:
        pattern: Pattern text, e.g. "Y+1 M2 D$1 h6 m0 s0". A blank pattern
            is the identity shift.
        cache: Optional cache to read from and store into. Without one the
            pattern is always parsed afresh.
        subsecond: Accept the l, u and n units. Defaults to the configured
            ``subsecond_units``.

    Returns:
        The validated ShiftSpec.

    Raises:
        ValidationError: One of PatternSyntaxError, SequenceError,
            OptionError or PartValueError.

    Example:
        from timeshift import ShiftCache, apply, parse

        cache = ShiftCache()
        first_sunday = parse("W^1 w0", cache)
        apply(first_sunday, "2021-01-20T00:00:00Z")  # 2021-01-03 00:00 UTC
    """
    if subsecond is None:
        subsecond = get_timeshift_config().subsecond_units

    pattern = pattern.strip()
    if not pattern:
        return EMPTY_SHIFT

    if cache is None:
        return _build(pattern, subsecond)
    return cache.get_or_build(
        pattern, lambda p: _build(p, subsecond), subsecond=subsecond
    )


def shift(pattern: str, t: Any, cache: ShiftCache | None = None) -> Any:
    """Parse ``pattern`` and apply it to ``t`` in one call."""
    return apply(parse(pattern, cache), t)
