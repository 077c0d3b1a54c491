"""
Structural model of fatty acids.

This subpackage describes a single fatty acid molecule: its carbon chain,
its unsaturated bonds and the nomenclature strings used to name it.

Modules:
    unsaturation:
        Bond value types (locant, cis/trans geometry, double/triple degree)
        and their canonical ordering.

    fatty_acid:
        Exact fatty acid records with derived chain chemistry (hydrogens,
        mass, ECN), fatty acid classes for range matching, and the table of
        even-chain saturated acids.

    display:
        Nomenclature rendering with configurable separators, geometry marker
        placement and cis elision. Provides the ``ID`` and ``COMMON`` presets.

Design Principle:
    This subpackage has no dependencies on pandas or on the index layer.
    It provides pure value types that can be independently tested.
"""

from .display import COMMON, ID, Display, Elision, Notation, Options, Separators, display, render
from .fatty_acid import (
    SATURATED,
    FattyAcid,
    FattyAcidClass,
    FattyAcidSpecification,
    StructuralValidationError,
    fatty_acid,
    saturated,
)
from .unsaturation import Isomerism, Unsaturated, Unsaturation

__all__ = [
    "COMMON",
    "ID",
    "Display",
    "Elision",
    "Notation",
    "Options",
    "Separators",
    "display",
    "render",
    "SATURATED",
    "FattyAcid",
    "FattyAcidClass",
    "FattyAcidSpecification",
    "StructuralValidationError",
    "fatty_acid",
    "saturated",
    "Isomerism",
    "Unsaturated",
    "Unsaturation",
]
