"""Apply a shift to whole columns of timestamps."""

from typing import Any

import pandas as pd

from timeshift.evaluator import apply
from timeshift.logging import get_logger
from timeshift.spec import ShiftSpec
from timeshift.utils import _is_pandas, _is_polars

_log = get_logger(__name__)


def shift_dates(values: pd.Series | pd.DatetimeIndex, spec: ShiftSpec) -> Any:
    """Shift every timestamp in a pandas Series or DatetimeIndex.

    Missing values stay missing. The identity spec returns ``values``
    unchanged.
    """
    if spec.empty or len(values) == 0:
        return values

    if isinstance(values, pd.DatetimeIndex):
        return pd.DatetimeIndex([apply(spec, v) for v in values], name=values.name)
    return values.map(lambda v: apply(spec, v))


def relabel_dates(df: Any, spec: ShiftSpec, column: str = "as_of_date") -> Any:
    """Shift the dates in one column of a DataFrame.

    Args:
        df: pandas or polars DataFrame. For pandas the column may also be
            an index level.
        spec: Parsed shift to apply.
        column: Name of the datetime column (or index level).

    Returns:
        A new DataFrame with the column shifted; other data is untouched.
    """
    if _is_polars(df):
        result = _relabel_dates_polars(df, spec, column)
    elif _is_pandas(df):
        result = _relabel_dates_pandas(df, spec, column)
    else:
        raise TypeError(f"Cannot relabel dates on {type(df)}")
    _log.debug("dates_relabelled", column=column, shift=spec.to_pattern())
    return result


def _relabel_dates_pandas(
    df: pd.DataFrame, spec: ShiftSpec, column: str
) -> pd.DataFrame:
    """Relabel dates for pandas DataFrame."""
    index_names = [name for name in df.index.names if name is not None]

    if column in index_names:
        if df.empty or spec.empty:
            return df
        # Reset index to modify the level, then restore it
        result = df.reset_index()
        result[column] = shift_dates(result[column], spec)
        return result.set_index(index_names)

    if column not in df.columns:
        raise KeyError(f"DataFrame has no column or index level {column!r}")
    if df.empty or spec.empty:
        return df

    result = df.copy()
    result[column] = shift_dates(result[column], spec)
    return result


def _relabel_dates_polars(df: Any, spec: ShiftSpec, column: str) -> Any:
    """Relabel dates for polars DataFrame."""
    import polars as pl

    if column not in df.columns:
        raise KeyError(f"DataFrame has no column {column!r}")
    if df.height == 0 or spec.empty:
        return df

    dtype = df.schema[column]

    # Shift each distinct date once and map the column through the result
    old_dates = df.select(column).unique().drop_nulls().to_series().to_list()
    new_dates = [apply(spec, d).to_pydatetime(warn=False) for d in old_dates]

    return df.with_columns(
        pl.col(column).replace_strict(
            old_dates, new_dates, default=pl.col(column), return_dtype=dtype
        )
    )
