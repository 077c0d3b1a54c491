"""
Lipid-quality indices over fatty acid profiles.

This subpackage sums value columns (abundances, mass fractions) over classes of
fatty acids and combines the class totals into nutritional indices. All
functions take a :class:`~fatty.columnar.FattyAcidColumn` and a value Series
aligned with it.

Modules:
    filters:
        Saturation classes (SFA, UFA, MUFA, PUFA), k-enoic classes, n-x
        families and named acids (C12:0 ... DHA) as value subsets.

    formulas:
        IA, IT, HH, HPI, UI, FLQ and TFA, the ``INDICES`` registry and the
        per-sample index table. Undefined ratios are ``nan``.

Design Principle:
    This subpackage never inspects bond cells itself; it only combines the
    masks and derived columns exposed by the columnar adapter.
"""

from .filters import (
    alpha_linolenic,
    docosahexaenoic,
    eicosapentaenoic,
    enoics,
    linoleic,
    matching,
    mufa,
    pufa,
    pufa_n,
    sfa,
    ufa,
)
from .formulas import (
    INDICES,
    compute_indices,
    flq,
    hh,
    hpi,
    ia,
    indices_table,
    it,
    ratio,
    tfa,
    ui,
)

__all__ = [
    # Filters
    "alpha_linolenic",
    "docosahexaenoic",
    "eicosapentaenoic",
    "enoics",
    "linoleic",
    "matching",
    "mufa",
    "pufa",
    "pufa_n",
    "sfa",
    "ufa",
    # Formulas
    "INDICES",
    "compute_indices",
    "flq",
    "hh",
    "hpi",
    "ia",
    "indices_table",
    "it",
    "ratio",
    "tfa",
    "ui",
]
