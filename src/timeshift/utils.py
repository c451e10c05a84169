"""Common utility functions for timeshift."""

from typing import Any

import pandas as pd


def _is_polars(df: Any) -> bool:
    """Check if df is a polars DataFrame."""
    try:
        import polars as pl
        return isinstance(df, pl.DataFrame)
    except ImportError:
        return False


def _is_pandas(df: Any) -> bool:
    """Check if df is a pandas DataFrame."""
    return isinstance(df, pd.DataFrame)


def to_timestamp(value: Any) -> pd.Timestamp:
    """Coerce a Timestamp, datetime, numpy datetime64 or ISO-8601 string.

    Missing values (None, NaT) come back as ``pd.NaT``.
    """
    if isinstance(value, pd.Timestamp):
        return value
    return pd.Timestamp(value)
