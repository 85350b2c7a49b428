"""Polars support for the raw predictor data.

Term reconstruction inspects the raw data column by column with the
pandas dtype API, so a Polars frame handed to an inspector is turned
into pandas once, at the boundary.  Polars ``Categorical``/``Enum``
columns become pandas ``category`` columns and keep their levels.

Polars is optional; without it only pandas frames are accepted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeAlias

import pandas as pd

try:
    import polars as pl
except ImportError:
    pl = None

if TYPE_CHECKING:
    import polars

    DataFrameLike: TypeAlias = pd.DataFrame | polars.DataFrame | polars.LazyFrame
else:
    DataFrameLike: TypeAlias = Any


def as_pandas_frame(data: DataFrameLike, *, name: str = "data") -> pd.DataFrame:
    """Return *data* as a pandas DataFrame.

    pandas frames pass through as the same object.  A Polars
    ``LazyFrame`` is collected before conversion.

    Raises:
        TypeError: If *data* is neither a pandas nor a Polars frame.
    """
    if isinstance(data, pd.DataFrame):
        return data
    if pl is not None:
        if isinstance(data, pl.LazyFrame):
            data = data.collect()
        if isinstance(data, pl.DataFrame):
            return data.to_pandas()
    accepted = "a pandas DataFrame"
    if pl is not None:
        accepted += " or Polars DataFrame/LazyFrame"
    raise TypeError(f"{name!r} must be {accepted}, got {type(data).__name__}.")
