"""Define standardized column names for fatty acid profile DataFrames."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FattyAcidColumns:
    """Container for standardized column labels.

    These names form the contract between the fatty acid model and any
    DataFrame that carries fatty acid structures, so that loaders, the
    columnar adapter, index formulas and reports agree on field names.

    Attributes:
        fatty_acid: Name of a struct-per-cell column holding both fields in
            one mapping (``{"Carbons": ..., "Unsaturated": ...}``).

        carbons: Carbon count of the main chain. Nullable unsigned integer in
            the 1-255 range; a null marks an unmeasured record.

        unsaturated: Bond list of a record. Each cell is null or a mapping
            with the three equal-length lists named below.

        index: Locant of each unsaturated bond, counted from the carboxyl
            carbon. Elements may be null (position unknown).

        isomerism: Geometry code of each bond: ``1`` cis, ``-1`` trans, null
            unknown.

        unsaturation: Degree code of each bond: ``1`` double bond, ``2``
            triple bond, null treated as a double bond.

        label: Optional human-readable name of the acid in loaded profiles.

        id, common: Nomenclature columns of an exported profile (``c18u1c9``
            and ``18:1Δ9`` forms).

        mass, ecn, degree: Derived chemistry columns of an exported profile:
            molar mass, equivalent carbon number and degrees of unsaturation
            ``U``. They describe the acid, not a sample.
    """

    fatty_acid: str = "FattyAcid"
    carbons: str = "Carbons"
    unsaturated: str = "Unsaturated"
    index: str = "Index"
    isomerism: str = "Isomerism"
    unsaturation: str = "Unsaturation"
    label: str = "Label"
    id: str = "ID"
    common: str = "Common"
    mass: str = "Mass"
    ecn: str = "ECN"
    degree: str = "U"

    @property
    def fields(self) -> tuple[str, str]:
        """Return the two fields every fatty acid column must carry."""
        return (self.carbons, self.unsaturated)

    @property
    def bond_fields(self) -> tuple[str, str, str]:
        """Return the three list fields of a bond cell."""
        return (self.index, self.isomerism, self.unsaturation)

    @property
    def report_fields(self) -> tuple[str, str, str, str, str]:
        """Return the columns added by the nomenclature report."""
        return (self.id, self.common, self.mass, self.ecn, self.degree)


COLUMNS = FattyAcidColumns()
