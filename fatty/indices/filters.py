"""Row filters over a fatty acid profile.

Every filter takes a :class:`~fatty.columnar.FattyAcidColumn` and a value
Series aligned with it row for row (abundance, concentration, ...), and
returns the subset of values whose fatty acid falls in the class. Summing the
result gives the class total used by the index formulas.

Rows with a null carbon count never match, nor do rows whose bonds violate the
chain invariants (see :meth:`~fatty.columnar.FattyAcidColumn.valid`). NaN
values are kept in the subset so that the caller's sum skips them.

Saturation classes are defined on the degree of unsaturation ``U``:

    SFA   U = 0        MUFA  U = 1        PUFA  U > 1        UFA  U != 0

Named acids match carbon count and ``U`` exactly.
"""

from __future__ import annotations

import warnings

import pandas as pd

from ..chemistry.fatty_acid import FattyAcidClass, FattyAcidSpecification
from ..columnar import FattyAcidColumn

C12U0 = FattyAcidClass(12, 0)
C14U0 = FattyAcidClass(14, 0)
C16U0 = FattyAcidClass(16, 0)
C18U0 = FattyAcidClass(18, 0)
C18U1 = FattyAcidClass(18, 1)
# Linoleic acid, 18:2 n-6
C18U2 = FattyAcidClass(18, 2)
# alpha-Linolenic acid, 18:3 n-3
C18U3 = FattyAcidClass(18, 3)
# Eicosapentaenoic acid (EPA), 20:5 n-3
C20U5 = FattyAcidClass(20, 5)
# Docosahexaenoic acid (DHA), 22:6 n-3
C22U6 = FattyAcidClass(22, 6)


def numeric_values(values: pd.Series) -> pd.Series:
    """Coerce a value column to floats, warning about unreadable entries."""
    numeric = pd.to_numeric(values, errors="coerce")
    coerced = int((numeric.isna() & values.notna()).sum())
    if coerced:
        warnings.warn(
            f"{coerced} non-numeric values in '{values.name}' were treated as missing.",
            UserWarning,
            stacklevel=3,
        )
    return numeric.astype(float)


def select(
    fatty_acids: FattyAcidColumn, values: pd.Series, mask: pd.Series
) -> pd.Series:
    """Return the values at valid rows where ``mask`` is True."""
    if len(values) != len(fatty_acids):
        raise ValueError(
            f"Value column has {len(values)} rows, fatty acid column has "
            f"{len(fatty_acids)}"
        )
    valid = fatty_acids.valid().to_numpy(dtype=bool)
    keep = mask.fillna(False).to_numpy(dtype=bool) & valid
    return numeric_values(values)[keep]


def _by_unsaturation(
    fatty_acids: FattyAcidColumn, values: pd.Series, compare
) -> pd.Series:
    return select(fatty_acids, values, compare(fatty_acids.unsaturation()))


def sfa(fatty_acids: FattyAcidColumn, values: pd.Series) -> pd.Series:
    """Saturated fatty acids."""
    return _by_unsaturation(fatty_acids, values, lambda u: u.eq(0))


def ufa(fatty_acids: FattyAcidColumn, values: pd.Series) -> pd.Series:
    """All unsaturated fatty acids."""
    return _by_unsaturation(fatty_acids, values, lambda u: u.ne(0))


def mufa(fatty_acids: FattyAcidColumn, values: pd.Series) -> pd.Series:
    """Unsaturated fatty acids with one degree of unsaturation."""
    return _by_unsaturation(fatty_acids, values, lambda u: u.eq(1))


def pufa(fatty_acids: FattyAcidColumn, values: pd.Series) -> pd.Series:
    """Unsaturated fatty acids with more than one degree of unsaturation."""
    return _by_unsaturation(fatty_acids, values, lambda u: u.gt(1))


def enoics(fatty_acids: FattyAcidColumn, values: pd.Series, degree: int) -> pd.Series:
    """Fatty acids with exactly ``degree`` degrees of unsaturation."""
    return _by_unsaturation(fatty_acids, values, lambda u: u.eq(degree))


def monoenoics(fatty_acids, values):
    return enoics(fatty_acids, values, 1)


def dienoics(fatty_acids, values):
    return enoics(fatty_acids, values, 2)


def trienoics(fatty_acids, values):
    return enoics(fatty_acids, values, 3)


def tetraenoics(fatty_acids, values):
    return enoics(fatty_acids, values, 4)


def pentaenoics(fatty_acids, values):
    return enoics(fatty_acids, values, 5)


def hexaenoics(fatty_acids, values):
    return enoics(fatty_acids, values, 6)


def pufa_n(fatty_acids: FattyAcidColumn, values: pd.Series, n: int) -> pd.Series:
    """PUFA of the n-``n`` family (n-3, n-6, ...).

    The family is read from the bond nearest the methyl end, ``C - max(Index)``;
    PUFA without any known locant belong to no family.
    """
    mask = fatty_acids.unsaturation().gt(1) & fatty_acids.omega().eq(n)
    return select(fatty_acids, values, mask)


def matching(
    fatty_acids: FattyAcidColumn,
    values: pd.Series,
    specification: FattyAcidSpecification,
) -> pd.Series:
    """Values of rows contained in an exact record or a fatty acid class."""
    return select(fatty_acids, values, fatty_acids.contains(specification))


def c12u0(fatty_acids, values):
    return matching(fatty_acids, values, C12U0)


def c14u0(fatty_acids, values):
    return matching(fatty_acids, values, C14U0)


def c16u0(fatty_acids, values):
    return matching(fatty_acids, values, C16U0)


def c18u0(fatty_acids, values):
    return matching(fatty_acids, values, C18U0)


def c18u1(fatty_acids, values):
    return matching(fatty_acids, values, C18U1)


def linoleic(fatty_acids, values):
    return matching(fatty_acids, values, C18U2)


def alpha_linolenic(fatty_acids, values):
    return matching(fatty_acids, values, C18U3)


def eicosapentaenoic(fatty_acids, values):
    return matching(fatty_acids, values, C20U5)


def docosahexaenoic(fatty_acids, values):
    return matching(fatty_acids, values, C22U6)


def tfa(fatty_acids, values):
    """Trans fatty acid marker: C18 acids with ``U = 3``.

    This is a fixed naming convention of the index table, not a geometry
    check; it selects the same rows as :func:`alpha_linolenic`.
    """
    return matching(fatty_acids, values, C18U3)
