"""Tests for the columnar adapter over pandas DataFrames."""

import math

import numpy as np
import pandas as pd
import pytest

from fatty.chemistry.display import ID
from fatty.chemistry.fatty_acid import (
    FattyAcid,
    FattyAcidClass,
    StructuralValidationError,
    fatty_acid,
)
from fatty.chemistry.unsaturation import Isomerism, Unsaturated, Unsaturation
from fatty.columnar import FattyAcidColumn, SchemaMismatchError, profile_frame
from fatty.schema import COLUMNS

RECORDS = [
    FattyAcid(16),
    fatty_acid(18, [9]),
    fatty_acid(18, [9, 12, 15]),
    None,
    fatty_acid(18, [9], [12]),
]


def _bonds(index, isomerism, unsaturation):
    return {"Index": index, "Isomerism": isomerism, "Unsaturation": unsaturation}


@pytest.fixture
def column():
    return FattyAcidColumn.from_records(RECORDS)


class TestRoundTrip:
    def test_records_survive_columnar_form(self, column):
        assert column.to_records() == RECORDS
        assert list(column) == RECORDS

    def test_structs_round_trip(self, column):
        again = FattyAcidColumn.from_structs(column.to_structs())
        assert again.to_records() == RECORDS

    def test_struct_column_in_frame(self, column):
        frame = pd.DataFrame({COLUMNS.fatty_acid: column.to_structs()})
        assert FattyAcidColumn(frame).to_records() == RECORDS

    def test_bonds_are_canonicalised_on_read(self):
        frame = pd.DataFrame(
            {
                "Carbons": [18],
                "Unsaturated": [_bonds([15, 12, 9], [-1, 1, 1], [1, 1, 1])],
            }
        )
        record = FattyAcidColumn(frame).get(0)
        assert record.unsaturated == [
            Unsaturated.cis(9),
            Unsaturated.cis(12),
            Unsaturated.trans(15),
        ]


class TestRowAccess:
    def test_row_count(self, column):
        assert len(column) == 5
        assert column.row_count() == 5

    def test_null_carbons_row(self, column):
        assert column.get(3) is None
        assert column.get_bonds(3) is None

    def test_partial_bond_fields(self):
        frame = pd.DataFrame(
            {
                "Carbons": [18],
                "Unsaturated": [_bonds([9, None], [None, -1], [1, None])],
            }
        )
        bonds = FattyAcidColumn(frame).get_bonds(0)
        assert bonds == [
            Unsaturated(None, Isomerism.TRANS, None),
            Unsaturated(9, None, Unsaturation.ONE),
        ]

    def test_out_of_chain_locant_raises_on_get(self):
        frame = pd.DataFrame({"Carbons": [18], "Unsaturated": [_bonds([18], [1], [1])]})
        column = FattyAcidColumn(frame)
        with pytest.raises(StructuralValidationError):
            column.get(0)
        assert not column.valid().iloc[0]

    def test_source_frame_is_not_modified(self):
        cell = _bonds((9,), (1,), (1,))
        frame = pd.DataFrame({"Carbons": [18.0], "Unsaturated": [cell]})
        FattyAcidColumn(frame)
        assert frame["Carbons"].dtype == np.float64
        assert frame["Unsaturated"].iloc[0] is cell


class TestDerivedColumns:
    def test_unsaturation_and_bond_count(self, column):
        assert column.unsaturated().tolist() == [0, 1, 3, pd.NA, 2]
        assert column.unsaturation().tolist() == [0, 1, 3, pd.NA, 3]

    def test_hydrogens_ecn_bounds(self, column):
        assert column.hydrogens().tolist() == [32, 34, 30, pd.NA, 30]
        assert column.ecn().tolist() == [16, 16, 12, pd.NA, 12]
        assert column.bounds().tolist() == [15, 17, 17, pd.NA, 17]

    def test_mass_matches_scalar_records(self, column):
        mass = column.mass()
        for row, record in enumerate(RECORDS):
            if record is None:
                assert pd.isna(mass.iloc[row])
            else:
                assert math.isclose(mass.iloc[row], record.mass)

    def test_saturated_and_omega(self, column):
        assert column.saturated().tolist() == [True, False, False, pd.NA, False]
        assert column.omega().tolist() == [pd.NA, 9, 3, pd.NA, 6]

    def test_contains_is_false_for_null_rows(self, column):
        mask = column.contains(FattyAcidClass(18, (1, 3)))
        assert mask.tolist() == [False, True, True, False, True]

    def test_contains_exact_record(self, column):
        mask = column.contains(fatty_acid(18, [9]))
        assert mask.tolist() == [False, True, False, False, False]

    def test_series_keep_frame_labels(self):
        frame = profile_frame([FattyAcid(12), fatty_acid(18, [9])])
        frame.index = ["a", "b"]
        assert list(FattyAcidColumn(frame).unsaturation().index) == ["a", "b"]

    def test_display(self, column):
        names = column.display(ID, expanded=True)
        assert names.tolist() == ["c16u0", "c18u1c9", "c18u3c9c12c15", None, "c18u2c9c12"]

    def test_display_warns_on_invalid_rows(self):
        frame = pd.DataFrame({"Carbons": [18], "Unsaturated": [_bonds([0], [1], [1])]})
        with pytest.warns(UserWarning, match="violate chain invariants"):
            names = FattyAcidColumn(frame).display()
        assert names.tolist() == [None]


class TestSchemaMismatch:
    def test_missing_field(self):
        with pytest.raises(SchemaMismatchError, match="missing fields"):
            FattyAcidColumn(pd.DataFrame({"Carbons": [18]}))

    def test_not_a_frame(self):
        with pytest.raises(SchemaMismatchError, match="DataFrame"):
            FattyAcidColumn([18])

    @pytest.mark.parametrize("carbons", [[18.5], ["eighteen"], [256], [-1]])
    def test_bad_carbons(self, carbons):
        frame = pd.DataFrame({"Carbons": carbons, "Unsaturated": [None]})
        with pytest.raises(SchemaMismatchError, match="Carbons"):
            FattyAcidColumn(frame)

    def test_boolean_carbons(self):
        frame = pd.DataFrame({"Carbons": [True], "Unsaturated": [None]})
        with pytest.raises(SchemaMismatchError):
            FattyAcidColumn(frame)

    def test_cell_not_a_mapping(self):
        frame = pd.DataFrame({"Carbons": [18], "Unsaturated": ["9,12"]})
        with pytest.raises(SchemaMismatchError, match="mappings"):
            FattyAcidColumn(frame)

    def test_cell_missing_list(self):
        frame = pd.DataFrame(
            {"Carbons": [18], "Unsaturated": [{"Index": [9], "Isomerism": [1]}]}
        )
        with pytest.raises(SchemaMismatchError, match="missing fields"):
            FattyAcidColumn(frame)

    def test_unequal_list_lengths(self):
        frame = pd.DataFrame(
            {"Carbons": [18], "Unsaturated": [_bonds([9, 12], [1], [1, 1])]}
        )
        with pytest.raises(SchemaMismatchError, match="equal lengths"):
            FattyAcidColumn(frame)

    def test_non_integer_element(self):
        frame = pd.DataFrame(
            {"Carbons": [18], "Unsaturated": [_bonds([9.5], [1], [1])]}
        )
        with pytest.raises(SchemaMismatchError, match="integers"):
            FattyAcidColumn(frame)

    def test_schema_error_is_value_error(self):
        with pytest.raises(ValueError):
            FattyAcidColumn(pd.DataFrame({"Unsaturated": [None]}))


class TestProfileFrame:
    def test_values_and_labels(self):
        frame = profile_frame(
            [FattyAcid(12), fatty_acid(18, [9])],
            values={"Value": [10, 5]},
            labels=["Lauric", "Oleic"],
        )
        assert list(frame.columns) == ["Label", "Carbons", "Unsaturated", "Value"]
        assert frame["Carbons"].dtype == "UInt8"
        assert frame["Value"].tolist() == [10.0, 5.0]

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="Value column"):
            profile_frame([FattyAcid(12)], values={"Value": [1, 2]})
