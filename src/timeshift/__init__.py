"""Timeshift - calendar-relative time shift patterns and their evaluator."""

from timeshift.calendar import ShiftRangeError
from timeshift.config import (
    configure_timeshift,
    get_timeshift_config,
    reset_timeshift_config,
)
from timeshift.core import parse, shift
from timeshift.dtshift import relabel_dates, shift_dates
from timeshift.evaluator import apply
from timeshift.grammar import Token, tokenize
from timeshift.logging import configure_logging, get_logger
from timeshift.memory_cache import CacheConfig, CacheStats, ShiftCache
from timeshift.spec import EMPTY_SHIFT, UNIT_ORDER, PartDef, ShiftSpec, build
from timeshift.validation import (
    OptionError,
    PartValueError,
    PatternSyntaxError,
    SequenceError,
    ValidationError,
)

__all__ = [
    # Primary API
    "parse",
    "apply",
    "shift",
    # Model
    "PartDef",
    "ShiftSpec",
    "EMPTY_SHIFT",
    "UNIT_ORDER",
    # Lower-level parsing
    "Token",
    "tokenize",
    "build",
    # Errors
    "ValidationError",
    "PatternSyntaxError",
    "SequenceError",
    "OptionError",
    "PartValueError",
    "ShiftRangeError",
    # Cache
    "ShiftCache",
    "CacheConfig",
    "CacheStats",
    # DataFrame helpers
    "shift_dates",
    "relabel_dates",
    # Logging
    "configure_logging",
    "get_logger",
    # Config
    "configure_timeshift",
    "get_timeshift_config",
    "reset_timeshift_config",
]
__version__ = "0.1.0"
