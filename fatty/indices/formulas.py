"""Nutritional lipid-quality indices of a fatty acid profile.

Each index is a closed-form combination of class totals (see
:mod:`fatty.indices.filters`):

    IA   (C12:0 + 4·C14:0 + C16:0) / ΣUFA
    IT   (C14:0 + C16:0 + C18:0) / (0.5·ΣMUFA + 0.5·Σn-6 + 3·Σn-3 + n-3/n-6)
    HH   (C18:1 + ΣPUFA) / (C12:0 + C14:0 + C16:0)
    HPI  ΣUFA / (C12:0 + 4·C14:0 + C16:0)
    UI   Σ k·(k-enoics), k = 1..6
    FLQ  (EPA + DHA) / ΣFA
    TFA  Σ C18 acids with U = 3

A zero (or non-finite) denominator makes an index undefined; undefined is
returned as ``nan`` and never raised, since sparse profiles without, say, any
unsaturated acid are expected.

References:
    Ulbricht T.L.V., Southgate D.A.T. (1991) Coronary heart disease: seven
    dietary factors. Lancet 338, 985-992 (IA, IT).
    Chen J., Liu H. (2020) Nutritional indices for assessing fatty acids: a
    mini-review. Int. J. Mol. Sci. 21, 5695 (HH, HPI, UI, FLQ).
"""

from __future__ import annotations

import logging
import math
import warnings
from typing import Callable, Dict, Iterable, Optional

import pandas as pd

from ..columnar import FattyAcidColumn
from ..schema import COLUMNS
from . import filters

logger = logging.getLogger(__name__)

IndexFormula = Callable[[FattyAcidColumn, pd.Series], float]


def ratio(numerator: float, denominator: float) -> float:
    """Divide, returning ``nan`` when the denominator is zero or not finite."""
    numerator = float(numerator)
    denominator = float(denominator)
    if not math.isfinite(denominator) or denominator == 0:
        return math.nan
    return numerator / denominator


def total(selected: pd.Series) -> float:
    """Sum of a filtered value Series; missing values are skipped."""
    return float(selected.sum(skipna=True))


def ia(fatty_acids: FattyAcidColumn, values: pd.Series) -> float:
    """Index of atherogenicity."""
    numerator = (
        total(filters.c12u0(fatty_acids, values))
        + 4 * total(filters.c14u0(fatty_acids, values))
        + total(filters.c16u0(fatty_acids, values))
    )
    return ratio(numerator, total(filters.ufa(fatty_acids, values)))


def it(fatty_acids: FattyAcidColumn, values: pd.Series) -> float:
    """Index of thrombogenicity.

    The ``n-3/n-6`` term only contributes when the profile has n-6 PUFA.
    """
    numerator = (
        total(filters.c14u0(fatty_acids, values))
        + total(filters.c16u0(fatty_acids, values))
        + total(filters.c18u0(fatty_acids, values))
    )
    n3 = total(filters.pufa_n(fatty_acids, values, 3))
    n6 = total(filters.pufa_n(fatty_acids, values, 6))
    n3_n6 = n3 / n6 if n6 > 0 else 0.0
    denominator = (
        0.5 * total(filters.mufa(fatty_acids, values)) + 0.5 * n6 + 3 * n3 + n3_n6
    )
    return ratio(numerator, denominator)


def hh(fatty_acids: FattyAcidColumn, values: pd.Series) -> float:
    """Hypocholesterolemic/hypercholesterolemic ratio."""
    numerator = total(filters.c18u1(fatty_acids, values)) + total(
        filters.pufa(fatty_acids, values)
    )
    denominator = (
        total(filters.c12u0(fatty_acids, values))
        + total(filters.c14u0(fatty_acids, values))
        + total(filters.c16u0(fatty_acids, values))
    )
    return ratio(numerator, denominator)


def hpi(fatty_acids: FattyAcidColumn, values: pd.Series) -> float:
    """Health-promoting index, the reciprocal of IA."""
    denominator = (
        total(filters.c12u0(fatty_acids, values))
        + 4 * total(filters.c14u0(fatty_acids, values))
        + total(filters.c16u0(fatty_acids, values))
    )
    return ratio(total(filters.ufa(fatty_acids, values)), denominator)


def ui(fatty_acids: FattyAcidColumn, values: pd.Series) -> float:
    """Unsaturation index, ``1·%monoenoics + 2·%dienoics + ... + 6·%hexaenoics``."""
    return sum(
        degree * total(filters.enoics(fatty_acids, values, degree))
        for degree in range(1, 7)
    )


def flq(fatty_acids: FattyAcidColumn, values: pd.Series) -> float:
    """Fish/flesh lipid quality, ``(EPA + DHA) / ΣFA``."""
    numerator = total(filters.eicosapentaenoic(fatty_acids, values)) + total(
        filters.docosahexaenoic(fatty_acids, values)
    )
    everything = fatty_acids.carbons().notna()
    return ratio(numerator, total(filters.select(fatty_acids, values, everything)))


def tfa(fatty_acids: FattyAcidColumn, values: pd.Series) -> float:
    return total(filters.tfa(fatty_acids, values))


def _class_total(selector) -> IndexFormula:
    def formula(fatty_acids: FattyAcidColumn, values: pd.Series) -> float:
        return total(selector(fatty_acids, values))

    formula.__name__ = selector.__name__
    formula.__doc__ = selector.__doc__
    return formula


def _family_total(n: int) -> IndexFormula:
    def formula(fatty_acids: FattyAcidColumn, values: pd.Series) -> float:
        return total(filters.pufa_n(fatty_acids, values, n))

    formula.__name__ = f"pufa_n{n}"
    return formula


INDICES: Dict[str, IndexFormula] = {
    "SFA": _class_total(filters.sfa),
    "UFA": _class_total(filters.ufa),
    "MUFA": _class_total(filters.mufa),
    "PUFA": _class_total(filters.pufa),
    "n-3 PUFA": _family_total(3),
    "n-6 PUFA": _family_total(6),
    "IA": ia,
    "IT": it,
    "HH": hh,
    "HPI": hpi,
    "UI": ui,
    "FLQ": flq,
    "TFA": tfa,
}


def compute_indices(
    fatty_acids: FattyAcidColumn,
    values: pd.Series,
    names: Optional[Iterable[str]] = None,
) -> Dict[str, float]:
    """Evaluate the registered indices for one value column.

    Args:
        fatty_acids (FattyAcidColumn): Structures of the profile.
        values (pandas.Series): Values aligned with ``fatty_acids``.
        names (Iterable[str], optional): Subset of :data:`INDICES` keys.
            Defaults to all, in registry order.

    Returns:
        dict[str, float]: Index name to value; undefined indices are ``nan``.

    Raises:
        KeyError: If an unknown index name is requested.
    """
    selected = list(INDICES) if names is None else list(names)
    unknown = [name for name in selected if name not in INDICES]
    if unknown:
        raise KeyError(f"Unknown indices {unknown}; known: {list(INDICES)}")

    measured = fatty_acids.carbons().notna().to_numpy(dtype=bool)
    invalid = int((measured & ~fatty_acids.valid().to_numpy(dtype=bool)).sum())
    if invalid:
        warnings.warn(
            f"{invalid} rows violate chain invariants and were excluded from "
            f"indices of '{values.name}'.",
            UserWarning,
            stacklevel=2,
        )

    results = {name: INDICES[name](fatty_acids, values) for name in selected}
    undefined = [name for name, value in results.items() if math.isnan(value)]
    if undefined:
        logger.debug("Undefined indices for '%s': %s", values.name, undefined)
    return results


def default_value_columns(frame: pd.DataFrame) -> list:
    """Return the numeric sample columns, skipping structure and report fields."""
    reserved = {
        *COLUMNS.fields,
        *COLUMNS.report_fields,
        COLUMNS.fatty_acid,
        COLUMNS.label,
    }
    return [
        column
        for column in frame.columns
        if column not in reserved and pd.api.types.is_numeric_dtype(frame[column])
    ]


def indices_table(
    frame: pd.DataFrame,
    value_columns: Optional[Iterable[str]] = None,
    names: Optional[Iterable[str]] = None,
) -> pd.DataFrame:
    """Compute indices for every value column of a profile.

    Args:
        frame (pandas.DataFrame): Profile with fatty acid fields and one or
            more value columns (one per sample).
        value_columns (Iterable[str], optional): Columns to evaluate. Defaults to
            every numeric column other than the structure fields.
        names (Iterable[str], optional): Subset of index names.

    Returns:
        pandas.DataFrame: One row per index, one column per value column.

    Raises:
        KeyError: If a requested value column is missing.
        SchemaMismatchError: If the fatty acid fields are malformed.
    """
    columns = (
        default_value_columns(frame) if value_columns is None else list(value_columns)
    )
    missing = [column for column in columns if column not in frame.columns]
    if missing:
        raise KeyError(f"Missing value columns {missing} for index computation.")

    fatty_acids = FattyAcidColumn(frame)
    table = pd.DataFrame(
        {
            column: compute_indices(fatty_acids, frame[column], names)
            for column in columns
        }
    )
    table.index.name = "Indicator"
    logger.info(
        "Computed %d indices for %d value columns", len(table.index), len(columns)
    )
    return table
