"""Module-level configuration for timeshift defaults."""

import threading
from dataclasses import dataclass
from typing import Literal

NonexistentPolicy = Literal["shift_forward", "shift_backward", "raise"]
_NONEXISTENT_POLICIES = ("shift_forward", "shift_backward", "raise")


@dataclass
class TimeShiftConfig:
    """Configuration for parsing and evaluation defaults."""

    subsecond_units: bool = True  # accept l/u/n clauses
    ambiguous: bool = True  # repeated wall times resolve to the DST reading
    nonexistent: NonexistentPolicy = "shift_forward"


# Module-level singleton
_timeshift_config: TimeShiftConfig | None = None
_config_lock = threading.Lock()


def get_timeshift_config() -> TimeShiftConfig:
    """Get the global timeshift configuration singleton."""
    global _timeshift_config
    if _timeshift_config is None:
        with _config_lock:
            if _timeshift_config is None:
                _timeshift_config = TimeShiftConfig()
    return _timeshift_config


def configure_timeshift(
    subsecond_units: bool | None = None,
    ambiguous: bool | None = None,
    nonexistent: NonexistentPolicy | None = None,
) -> None:
    """Configure default timeshift settings.

    Args:
        subsecond_units: Whether patterns may use the millisecond (l),
            microsecond (u) and nanosecond (n) units. When disabled those
            clauses are rejected as out of sequence.
        ambiguous: How to re-attach a DST zone to a wall time that occurs
            twice. True picks the DST reading, False the standard one.
        nonexistent: How to re-attach a DST zone to a wall time skipped by
            a transition; one of "shift_forward", "shift_backward" or
            "raise".

    Example:
        from timeshift import configure_timeshift

        # Reject sub-second units everywhere
        configure_timeshift(subsecond_units=False)
    """
    if nonexistent is not None and nonexistent not in _NONEXISTENT_POLICIES:
        raise ValueError(
            f"nonexistent must be one of {_NONEXISTENT_POLICIES}, got {nonexistent!r}"
        )

    config = get_timeshift_config()
    with _config_lock:
        if subsecond_units is not None:
            config.subsecond_units = subsecond_units
        if ambiguous is not None:
            config.ambiguous = ambiguous
        if nonexistent is not None:
            config.nonexistent = nonexistent


def reset_timeshift_config() -> None:
    """Reset configuration to defaults. Useful for testing."""
    global _timeshift_config
    with _config_lock:
        _timeshift_config = TimeShiftConfig()
