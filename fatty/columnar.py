"""
Adapt pandas columns of fatty acid structures to the scalar record model.

A fatty acid column is two aligned fields (see :mod:`fatty.schema`):

    Carbons      nullable integer, one value per row
    Unsaturated  one bond cell per row: null or a mapping of three
                 equal-length lists (Index, Isomerism, Unsaturation)

:class:`FattyAcidColumn` validates that shape once, up front, keeps a
normalised private copy, and then serves both views of the same data: single
records through :meth:`FattyAcidColumn.get` and whole derived columns
(unsaturation, hydrogens, mass, ...) computed in bulk with pandas.
"""

# Algorithm summary: normalise every bond cell to plain lists of ints/None,
# flatten all bonds into one long table keyed by row position, and derive
# per-row quantities with groupby aggregates reindexed onto the full column.
# Rows with a null carbon count stay in place and yield <NA> everywhere.

from __future__ import annotations

import logging
import warnings
from collections.abc import Mapping
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from .chemistry.display import COMMON, Options, render
from .chemistry.fatty_acid import (
    FattyAcid,
    FattyAcidSpecification,
    StructuralValidationError,
)
from .chemistry.unsaturation import Unsaturated, canonical
from .constants import (
    CARBOXYL_OXYGENS,
    MAX_CARBONS,
    RELATIVE_ATOMIC_MASS_C,
    RELATIVE_ATOMIC_MASS_H,
    RELATIVE_ATOMIC_MASS_O,
)
from .schema import COLUMNS

logger = logging.getLogger(__name__)

ROW = "Row"


class SchemaMismatchError(ValueError):
    """Raised when a column does not have the fatty acid structure."""


def _is_null(value) -> bool:
    if value is None:
        return True
    if isinstance(value, (Mapping, list, tuple, np.ndarray, pd.Series)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _as_code(value, field: str, row: int) -> Optional[int]:
    """Convert one list element to ``int`` or ``None``."""
    if _is_null(value):
        return None
    if isinstance(value, (bool, np.bool_)):
        raise SchemaMismatchError(
            f"Row {row}: {field} elements must be integers, got a boolean"
        )
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise SchemaMismatchError(
            f"Row {row}: {field} elements must be integers, got {value!r}"
        ) from None
    if not number.is_integer():
        raise SchemaMismatchError(
            f"Row {row}: {field} elements must be integers, got {value!r}"
        )
    return int(number)


def _object_array(items: Sequence) -> np.ndarray:
    array = np.empty(len(items), dtype=object)
    for position, item in enumerate(items):
        array[position] = item
    return array


def _normalize_cell(cell, row: int) -> Optional[Dict[str, List[Optional[int]]]]:
    """Validate one bond cell and convert it to plain lists."""
    if _is_null(cell):
        return None
    if not isinstance(cell, Mapping):
        raise SchemaMismatchError(
            f"Row {row}: {COLUMNS.unsaturated} cells must be mappings of "
            f"{list(COLUMNS.bond_fields)}, got {type(cell).__name__}"
        )
    missing = [name for name in COLUMNS.bond_fields if name not in cell]
    if missing:
        raise SchemaMismatchError(
            f"Row {row}: {COLUMNS.unsaturated} cell is missing fields {missing}"
        )

    lists = {}
    for name in COLUMNS.bond_fields:
        values = cell[name]
        if _is_null(values):
            values = []
        if isinstance(values, (str, bytes)) or not isinstance(
            values, (list, tuple, np.ndarray, pd.Series)
        ):
            raise SchemaMismatchError(
                f"Row {row}: {name} must be a list, got {type(values).__name__}"
            )
        lists[name] = [_as_code(value, name, row) for value in values]

    lengths = {name: len(values) for name, values in lists.items()}
    if len(set(lengths.values())) > 1:
        raise SchemaMismatchError(
            f"Row {row}: bond lists must have equal lengths, got {lengths}"
        )
    return lists


def _normalize_carbons(series: pd.Series) -> pd.Series:
    """Validate the carbons field and cast it to nullable ``UInt8``."""
    if pd.api.types.is_bool_dtype(series):
        raise SchemaMismatchError(
            f"{COLUMNS.carbons} must be an integer column, got {series.dtype}"
        )
    if pd.api.types.is_numeric_dtype(series):
        numeric = series.astype("Float64")
    else:
        numeric = pd.to_numeric(series, errors="coerce").astype("Float64")
        given = np.array([not _is_null(value) for value in series], dtype=bool)
        coerced = numeric.isna().to_numpy(dtype=bool) & given
        if coerced.any():
            first = series[coerced].iloc[0]
            raise SchemaMismatchError(
                f"{COLUMNS.carbons} must be an integer column, got {first!r}"
            )

    present = numeric.dropna()
    if not present.mod(1).eq(0).all():
        raise SchemaMismatchError(f"{COLUMNS.carbons} values must be integers")
    if ((present < 0) | (present > MAX_CARBONS)).any():
        raise SchemaMismatchError(
            f"{COLUMNS.carbons} values must fit in 0..{MAX_CARBONS}"
        )
    return numeric.astype("UInt8")


class FattyAcidColumn:
    """Read-only adapter over a column of fatty acid structures.

    Args:
        frame (pandas.DataFrame): Frame carrying the ``Carbons`` and
            ``Unsaturated`` fields, or a struct-per-cell ``FattyAcid`` column.
            Other columns are ignored. The frame is not modified.

    Raises:
        SchemaMismatchError: If a field is missing or any row has the wrong
            type or shape. Validation covers every row before the adapter is
            returned.

    Note:
        Row arguments of :meth:`get` and :meth:`get_bonds` are positions
        (``0 .. len - 1``); derived Series keep the labels of the source
        frame so they align with its value columns.
    """

    def __init__(self, frame: pd.DataFrame):
        if not isinstance(frame, pd.DataFrame):
            raise SchemaMismatchError(
                f"Expected a pandas DataFrame, got {type(frame).__name__}"
            )
        if (
            COLUMNS.carbons not in frame.columns
            and COLUMNS.unsaturated not in frame.columns
            and COLUMNS.fatty_acid in frame.columns
        ):
            frame = _split_structs(frame[COLUMNS.fatty_acid])

        missing = [name for name in COLUMNS.fields if name not in frame.columns]
        if missing:
            raise SchemaMismatchError(
                f"Fatty acid column is missing fields {missing}; "
                f"available columns: {list(frame.columns)}"
            )

        carbons = _normalize_carbons(frame[COLUMNS.carbons])
        cells = [
            _normalize_cell(cell, row)
            for row, cell in enumerate(frame[COLUMNS.unsaturated].tolist())
        ]
        self._frame = pd.DataFrame(
            {
                COLUMNS.carbons: carbons.array,
                COLUMNS.unsaturated: _object_array(cells),
            },
            index=frame.index,
        )
        self._bonds = self._flatten(cells)

        n_missing = int(carbons.isna().sum())
        if n_missing:
            logger.info(
                "Fatty acid column has %d of %d rows without a carbon count",
                n_missing,
                len(carbons),
            )

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "FattyAcidColumn":
        return cls(frame)

    @classmethod
    def from_structs(cls, series: pd.Series) -> "FattyAcidColumn":
        """Adapt a Series whose cells are ``{"Carbons", "Unsaturated"}`` mappings."""
        return cls(_split_structs(series))

    @classmethod
    def from_records(
        cls,
        records: Iterable[Optional[FattyAcid]],
        index: Optional[Sequence] = None,
    ) -> "FattyAcidColumn":
        """Build a column from scalar records; ``None`` becomes a null row."""
        carbons = []
        cells = []
        for record in records:
            if record is None:
                carbons.append(None)
                cells.append(None)
                continue
            codes = [bond.codes() for bond in record.unsaturated]
            carbons.append(record.carbons)
            cells.append(
                {
                    COLUMNS.index: [code[0] for code in codes],
                    COLUMNS.isomerism: [code[1] for code in codes],
                    COLUMNS.unsaturation: [code[2] for code in codes],
                }
            )
        frame = pd.DataFrame(
            {
                COLUMNS.carbons: pd.array(carbons, dtype="UInt8"),
                COLUMNS.unsaturated: _object_array(cells),
            },
            index=index,
        )
        return cls(frame)

    @staticmethod
    def _flatten(cells: List[Optional[dict]]) -> pd.DataFrame:
        records = []
        for row, cell in enumerate(cells):
            if cell is None:
                continue
            for index, isomerism, unsaturation in zip(
                *(cell[name] for name in COLUMNS.bond_fields)
            ):
                records.append((row, index, isomerism, unsaturation))
        bonds = pd.DataFrame.from_records(
            records, columns=[ROW, *COLUMNS.bond_fields]
        )
        for name in COLUMNS.bond_fields:
            bonds[name] = bonds[name].astype("Int64")
        bonds[ROW] = bonds[ROW].astype(int)
        return bonds

    def __len__(self) -> int:
        return len(self._frame)

    def row_count(self) -> int:
        return len(self._frame)

    @property
    def index(self) -> pd.Index:
        return self._frame.index

    def to_frame(self) -> pd.DataFrame:
        """Return a normalised copy of the two fatty acid fields."""
        return self._frame.copy(deep=True)

    def to_structs(self) -> pd.Series:
        """Return the column as one ``{"Carbons", "Unsaturated"}`` mapping per row."""
        structs = []
        for carbons, cell in zip(
            self._frame[COLUMNS.carbons], self._frame[COLUMNS.unsaturated]
        ):
            structs.append(
                {
                    COLUMNS.carbons: None if pd.isna(carbons) else int(carbons),
                    COLUMNS.unsaturated: None
                    if cell is None
                    else {name: list(values) for name, values in cell.items()},
                }
            )
        return pd.Series(
            structs, index=self._frame.index, dtype=object, name=COLUMNS.fatty_acid
        )

    def get_bonds(self, row: int) -> Optional[List[Unsaturated]]:
        """Materialise the bonds of one row in canonical order.

        Returns:
            Optional[list[Unsaturated]]: ``None`` when the bond cell is null.
        """
        cell = self._frame[COLUMNS.unsaturated].iloc[row]
        if cell is None:
            return None
        return canonical(
            Unsaturated.from_codes(*codes)
            for codes in zip(*(cell[name] for name in COLUMNS.bond_fields))
        )

    def get(self, row: int) -> Optional[FattyAcid]:
        """Materialise one row as a :class:`FattyAcid`.

        Returns:
            Optional[FattyAcid]: ``None`` when the carbon count is null.

        Raises:
            StructuralValidationError: If the row violates a chain invariant.
        """
        carbons = self._frame[COLUMNS.carbons].iloc[row]
        if pd.isna(carbons):
            return None
        return FattyAcid(int(carbons), self.get_bonds(row) or [])

    def to_records(self) -> List[Optional[FattyAcid]]:
        return [self.get(row) for row in range(len(self))]

    def __iter__(self):
        return iter(self.to_records())

    def _per_row(self, aggregated: pd.Series) -> pd.Series:
        """Spread a groupby-by-row result onto every row; null rows become <NA>."""
        values = aggregated.reindex(range(len(self)), fill_value=0)
        series = pd.Series(values.to_numpy(), index=self._frame.index).astype("Int64")
        return series.mask(self._frame[COLUMNS.carbons].isna().to_numpy())

    def carbons(self) -> pd.Series:
        return self._frame[COLUMNS.carbons].copy()

    def unsaturated(self) -> pd.Series:
        """Number of unsaturated bonds per row."""
        return self._per_row(self._bonds.groupby(ROW).size())

    def unsaturation(self) -> pd.Series:
        """Degrees of unsaturation ``U`` per row; triple bonds count twice."""
        degree = pd.Series(
            np.where(self._bonds[COLUMNS.unsaturation].eq(2).fillna(False), 2, 1),
            index=self._bonds.index,
        )
        return self._per_row(degree.groupby(self._bonds[ROW]).sum())

    def bounds(self) -> pd.Series:
        return (self.carbons().astype("Int64") - 1).clip(lower=0)

    def hydrogens(self) -> pd.Series:
        return 2 * self.carbons().astype("Int64") - 2 * self.unsaturation()

    def ecn(self) -> pd.Series:
        return self.carbons().astype("Int64") - 2 * self.unsaturation()

    def mass(self) -> pd.Series:
        return (
            self.carbons().astype("Float64") * RELATIVE_ATOMIC_MASS_C
            + self.hydrogens().astype("Float64") * RELATIVE_ATOMIC_MASS_H
            + CARBOXYL_OXYGENS * RELATIVE_ATOMIC_MASS_O
        )

    def saturated(self) -> pd.Series:
        return self.unsaturation().eq(0)

    def omega(self) -> pd.Series:
        """n-x family per row, ``C - max(Index)``; <NA> without a known locant."""
        last = self._bonds.dropna(subset=[COLUMNS.index]).groupby(ROW)[COLUMNS.index].max()
        last = last.reindex(range(len(self)))
        last = pd.Series(last.to_numpy(), index=self._frame.index, dtype="Int64")
        return self.carbons().astype("Int64") - last

    def valid(self) -> pd.Series:
        """True where the row materialises without a structural error."""
        carbons = self.carbons().astype("Int64")
        row_carbons = carbons.iloc[self._bonds[ROW].to_numpy()].to_numpy()
        locants = self._bonds[COLUMNS.index]
        bad = (locants <= 0) | (locants >= pd.array(row_carbons, dtype="Int64"))
        bad_rows = self._bonds.loc[bad.fillna(False).astype(bool), ROW].unique()

        ok = carbons.ge(1).fillna(False).astype(bool)
        ok.iloc[bad_rows] = False
        return ok

    def contains(self, specification: FattyAcidSpecification) -> pd.Series:
        """Boolean mask of rows inside ``specification``; null rows are False."""
        c_low, c_high = specification.carbons_range
        u_low, u_high = specification.unsaturation_range
        carbons = self.carbons().astype("Int64")
        unsaturation = self.unsaturation()
        mask = carbons.between(c_low, c_high) & unsaturation.between(u_low, u_high)
        return mask.fillna(False).astype(bool)

    def display(
        self, options: Options = COMMON, width: int = 0, expanded: bool = False
    ) -> pd.Series:
        """Render every row; null or structurally invalid rows give ``None``."""
        names = []
        invalid = 0
        for row in range(len(self)):
            try:
                record = self.get(row)
            except StructuralValidationError:
                invalid += 1
                record = None
            names.append(
                None
                if record is None
                else render(record, options, width=width, expanded=expanded)
            )
        if invalid:
            warnings.warn(
                f"{invalid} rows violate chain invariants and were not rendered.",
                UserWarning,
                stacklevel=2,
            )
        return pd.Series(names, index=self._frame.index, dtype=object)


def _split_structs(series: pd.Series) -> pd.DataFrame:
    """Split a struct-per-cell Series into the two fatty acid fields."""
    carbons = []
    cells = []
    for row, struct in enumerate(series.tolist()):
        if _is_null(struct):
            carbons.append(None)
            cells.append(None)
            continue
        if not isinstance(struct, Mapping):
            raise SchemaMismatchError(
                f"Row {row}: {COLUMNS.fatty_acid} cells must be mappings, "
                f"got {type(struct).__name__}"
            )
        missing = [name for name in COLUMNS.fields if name not in struct]
        if missing:
            raise SchemaMismatchError(
                f"Row {row}: {COLUMNS.fatty_acid} cell is missing fields {missing}"
            )
        carbons.append(struct[COLUMNS.carbons])
        cells.append(struct[COLUMNS.unsaturated])
    return pd.DataFrame(
        {
            COLUMNS.carbons: _object_array(carbons),
            COLUMNS.unsaturated: _object_array(cells),
        },
        index=series.index,
    )


def profile_frame(
    records: Sequence[Optional[FattyAcid]],
    values: Optional[Mapping] = None,
    labels: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Build a profile DataFrame from scalar records and value columns.

    Args:
        records: Fatty acid records, ``None`` for unmeasured rows.
        values: Mapping of column name to per-record numbers (for example
            ``{"Value": [10.0, 5.0]}``).
        labels: Optional row labels stored in the ``Label`` column.

    Returns:
        pandas.DataFrame: ``Carbons`` and ``Unsaturated`` fields followed by
        the value columns, ready for :class:`FattyAcidColumn` and the index
        formulas.

    Raises:
        ValueError: If a value column or the labels differ in length from
            ``records``.
    """
    records = list(records)
    frame = FattyAcidColumn.from_records(records).to_frame()
    if labels is not None:
        if len(labels) != len(records):
            raise ValueError(
                f"Expected {len(records)} labels, got {len(labels)}"
            )
        frame.insert(0, COLUMNS.label, list(labels))
    for name, column in (values or {}).items():
        column = list(column)
        if len(column) != len(records):
            raise ValueError(
                f"Value column '{name}' has {len(column)} entries, "
                f"expected {len(records)}"
            )
        frame[name] = pd.to_numeric(pd.Series(column), errors="coerce").to_numpy(dtype=float)
    return frame
