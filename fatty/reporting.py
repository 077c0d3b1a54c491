"""Format profile and index tables for human-readable reports.

Numeric columns are always kept next to their formatted counterparts so that
exported tables remain usable for downstream computation.
"""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np
import pandas as pd

from .chemistry.display import COMMON, ID
from .columnar import FattyAcidColumn
from .schema import COLUMNS

UNDEFINED = "undefined"


def add_nomenclature_columns(
    df: pd.DataFrame, width: int = 0, expanded: bool = True
) -> pd.DataFrame:
    """Add nomenclature and chain chemistry columns to a profile.

    Args:
        df (pandas.DataFrame): Profile carrying the fatty acid fields.
        width (int, optional): Zero-padding width of numeric fields in the
            names. Defaults to ``0``.
        expanded (bool, optional): Include bond locants in the names.
            Defaults to ``True``.

    Returns:
        pandas.DataFrame: Copy of ``df`` with ``ID``, ``Common``, ``Mass``,
        ``ECN`` and ``U`` columns added.

    Raises:
        SchemaMismatchError: If the fatty acid fields are malformed.

    Note:
        Rows without a carbon count, or with bonds outside the chain, get an
        empty name and ``<NA>`` chemistry.
    """
    fatty_acids = FattyAcidColumn(df)
    out = df.copy()
    out[COLUMNS.id] = fatty_acids.display(ID, width=width, expanded=expanded).array
    out[COLUMNS.common] = fatty_acids.display(
        COMMON, width=width, expanded=expanded
    ).array
    out[COLUMNS.mass] = fatty_acids.mass().array
    out[COLUMNS.ecn] = fatty_acids.ecn().array
    out[COLUMNS.degree] = fatty_acids.unsaturation().array
    return out


def format_index_value(value: float, decimals: int = 3) -> str:
    """Format one index value; undefined (non-finite) values become ``"undefined"``."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return UNDEFINED
    if not np.isfinite(number):
        return UNDEFINED
    return f"{number:.{decimals}f}"


def format_indices(
    table: pd.DataFrame,
    decimals: int = 3,
    columns: Optional[Iterable[str]] = None,
) -> pd.DataFrame:
    """Return a string copy of an index table.

    Args:
        table (pandas.DataFrame): Output of
            :func:`fatty.indices.formulas.indices_table`.
        decimals (int, optional): Decimal places. Defaults to ``3``.
        columns (Iterable[str], optional): Value columns to keep. Defaults to
            all columns.

    Returns:
        pandas.DataFrame: Same shape (restricted to ``columns``) with values
        formatted as text.

    Raises:
        KeyError: If a requested column is missing.
        ValueError: If ``decimals`` is negative.
    """
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")
    selected = list(table.columns) if columns is None else list(columns)
    for column in selected:
        if column not in table.columns:
            raise KeyError(f"Missing value column '{column}' for index report.")

    out = table[selected].copy()
    for column in selected:
        out[column] = [format_index_value(v, decimals) for v in table[column]]
    return out
