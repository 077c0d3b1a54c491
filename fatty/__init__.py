"""
A Python package for fatty acid structures and lipid-quality indices.

Models fatty acid chains and their unsaturated bonds, renders them in common
and identifier nomenclature, and computes nutritional indices over profiles
held in pandas DataFrames.

Modules:
    - chemistry: Bond and fatty acid value types and nomenclature rendering.
    - columnar: Adapter between DataFrame columns and fatty acid records.
    - indices: Class filters and lipid-quality index formulas.
    - reference: Flat CSV profiles and the packaged mature milk composition.
    - reporting/output: Report columns and CSV export.
"""

__version__ = "1.0.0"

from .chemistry import (
    COMMON,
    ID,
    SATURATED,
    Display,
    Elision,
    FattyAcid,
    FattyAcidClass,
    FattyAcidSpecification,
    Isomerism,
    Notation,
    Options,
    Separators,
    StructuralValidationError,
    Unsaturated,
    Unsaturation,
    display,
    fatty_acid,
    render,
    saturated,
)
from .columnar import FattyAcidColumn, SchemaMismatchError, profile_frame
from .indices import INDICES, compute_indices, indices_table
from .output import save_results_to_csv
from .reference import load_profile, mature_milk
from .reporting import add_nomenclature_columns, format_indices
from .schema import COLUMNS, FattyAcidColumns

__all__ = [
    # Structures
    "FattyAcid",
    "FattyAcidClass",
    "FattyAcidSpecification",
    "Isomerism",
    "SATURATED",
    "StructuralValidationError",
    "Unsaturated",
    "Unsaturation",
    "fatty_acid",
    "saturated",
    # Nomenclature
    "COMMON",
    "ID",
    "Display",
    "Elision",
    "Notation",
    "Options",
    "Separators",
    "display",
    "render",
    # Columns
    "COLUMNS",
    "FattyAcidColumns",
    "FattyAcidColumn",
    "SchemaMismatchError",
    "profile_frame",
    # Indices
    "INDICES",
    "compute_indices",
    "indices_table",
    # Data and reports
    "load_profile",
    "mature_milk",
    "add_nomenclature_columns",
    "format_indices",
    "save_results_to_csv",
]
