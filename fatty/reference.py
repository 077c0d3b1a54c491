"""
Load fatty acid profiles from flat CSV files, including the packaged
reference composition of mature human milk.
"""

# Flat profile format: one row per acid with the bond fields written as
# semicolon-separated lists, e.g.
#
#     Label,Carbons,Index,Isomerism,Unsaturation,Mature
#     Linoleic,18,9;12,1;1,1;1,13.5
#
# An empty list cell means "no bonds"; an unknown element inside a list is
# written as "?" ("9;?"). A blank element ("9;") is read as unknown as well.
# Rows without a carbon count are kept as null rows.

from __future__ import annotations

import copy
import logging
import os
from functools import lru_cache
from typing import List, Optional

import pandas as pd

from .columnar import FattyAcidColumn, SchemaMismatchError
from .schema import COLUMNS

logger = logging.getLogger(__name__)

LIST_SEPARATOR = ";"
NULL_TOKEN = "?"
MATURE_MILK_PATH = os.path.join(os.path.dirname(__file__), "data", "mature_milk.csv")


def _parse_list(text, field: str, row: int) -> List[Optional[int]]:
    if pd.isna(text):
        return []
    text = str(text).strip()
    if not text:
        return []
    values = []
    for element in text.split(LIST_SEPARATOR):
        element = element.strip()
        if not element or element == NULL_TOKEN:
            values.append(None)
            continue
        try:
            values.append(int(element))
        except ValueError:
            raise SchemaMismatchError(
                f"Row {row}: {field} element {element!r} is not an integer"
            ) from None
    return values


def _format_list(values) -> str:
    return LIST_SEPARATOR.join(
        NULL_TOKEN if value is None else str(value) for value in values
    )


def from_flat_frame(flat: pd.DataFrame) -> pd.DataFrame:
    """Convert a flat profile table into columnar form.

    Args:
        flat (pandas.DataFrame): Table with ``Carbons`` and the three bond list
            columns as text.

    Returns:
        pandas.DataFrame: Copy of ``flat`` where the bond list columns are
        replaced by one ``Unsaturated`` column of mappings, validated by
        :class:`~fatty.columnar.FattyAcidColumn`.

    Raises:
        SchemaMismatchError: If a required column is missing or a list element
            is not an integer.
    """
    required = [COLUMNS.carbons, *COLUMNS.bond_fields]
    missing = [name for name in required if name not in flat.columns]
    if missing:
        raise SchemaMismatchError(
            f"Flat profile is missing columns {missing}; "
            f"available columns: {list(flat.columns)}"
        )

    cells = []
    bond_texts = flat[list(COLUMNS.bond_fields)].itertuples(index=False)
    for row, record in enumerate(bond_texts):
        if pd.isna(flat[COLUMNS.carbons].iloc[row]):
            cells.append(None)
            continue
        cells.append(
            {
                name: _parse_list(text, name, row)
                for name, text in zip(COLUMNS.bond_fields, record)
            }
        )

    frame = flat.drop(columns=list(COLUMNS.bond_fields))
    position = frame.columns.get_loc(COLUMNS.carbons) + 1
    frame.insert(
        position,
        COLUMNS.unsaturated,
        pd.Series(cells, index=frame.index, dtype=object),
    )

    normalised = FattyAcidColumn(frame).to_frame()
    frame[COLUMNS.carbons] = normalised[COLUMNS.carbons]
    frame[COLUMNS.unsaturated] = normalised[COLUMNS.unsaturated]
    return frame


def to_flat_frame(frame: pd.DataFrame) -> pd.DataFrame:
    """Inverse of :func:`from_flat_frame`, for CSV export."""
    normalised = FattyAcidColumn(frame).to_frame()
    flat = frame.drop(columns=[COLUMNS.unsaturated])
    position = flat.columns.get_loc(COLUMNS.carbons) + 1
    for offset, name in enumerate(COLUMNS.bond_fields):
        texts = [
            "" if cell is None else _format_list(cell[name])
            for cell in normalised[COLUMNS.unsaturated]
        ]
        flat.insert(position + offset, name, texts)
    return flat


def load_profile(filepath) -> pd.DataFrame:
    """Load a flat CSV profile.

    Args:
        filepath (str): Path to the CSV file.

    Returns:
        pandas.DataFrame: Profile in columnar form with its value columns.
    """
    flat = pd.read_csv(filepath, dtype={name: str for name in COLUMNS.bond_fields})
    frame = from_flat_frame(flat)
    logger.info("Loaded %d fatty acids from %s", len(frame), filepath)
    return frame


@lru_cache(maxsize=None)
def _mature_milk() -> pd.DataFrame:
    return load_profile(MATURE_MILK_PATH)


def mature_milk() -> pd.DataFrame:
    """Fatty acid composition of mature human milk, % of total fatty acids.

    The table is read once per process; every call returns an independent
    copy.

    References:
        Typical values compiled from reviews of human milk lipid composition
        (e.g. Koletzko B. et al. (2001) Adv. Exp. Med. Biol. 501, 299-308).
    """
    frame = _mature_milk().copy(deep=True)
    frame[COLUMNS.unsaturated] = pd.Series(
        [copy.deepcopy(cell) for cell in frame[COLUMNS.unsaturated]],
        index=frame.index,
        dtype=object,
    )
    return frame
