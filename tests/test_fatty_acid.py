"""Tests for fatty acid records, classes and the saturated table."""

import itertools
import math

import pytest

from fatty.chemistry.fatty_acid import (
    SATURATED,
    FattyAcid,
    FattyAcidClass,
    StructuralValidationError,
    fatty_acid,
    saturated,
)
from fatty.chemistry.unsaturation import Isomerism, Unsaturated, Unsaturation
from fatty.constants import (
    RELATIVE_ATOMIC_MASS_C,
    RELATIVE_ATOMIC_MASS_H,
    RELATIVE_ATOMIC_MASS_O,
)


class TestValidation:
    """Check chain invariants on construction and insertion."""

    @pytest.mark.parametrize("index", [0, 18, 19])
    def test_push_rejects_locants_outside_chain(self, index):
        record = FattyAcid(18)
        with pytest.raises(StructuralValidationError):
            record.push(Unsaturated.cis(index))

    def test_push_accepts_inner_locant(self):
        record = FattyAcid(18)
        record.push(Unsaturated.cis(9))
        assert record.unsaturated == [Unsaturated.cis(9)]

    def test_push_accepts_unknown_locant(self):
        record = FattyAcid(18)
        record.push(Unsaturated(None, Isomerism.CIS, Unsaturation.ONE))
        assert record.unsaturation == 1

    def test_negative_locant_is_rejected(self):
        with pytest.raises(StructuralValidationError, match="negative"):
            FattyAcid(18, [Unsaturated(-3)])

    @pytest.mark.parametrize("carbons", [0, -1, 256])
    def test_carbon_count_out_of_range(self, carbons):
        with pytest.raises(StructuralValidationError, match="Carbon count"):
            FattyAcid(carbons)

    def test_structural_error_is_value_error(self):
        with pytest.raises(ValueError):
            FattyAcid(18, [Unsaturated.cis(18)])

    def test_non_bond_is_type_error(self):
        with pytest.raises(TypeError):
            FattyAcid(18, [9])


class TestCanonicalRecord:
    """Insertion order never changes a record."""

    def test_every_insertion_order_gives_an_equal_record(self):
        bonds = [
            Unsaturated.cis(9),
            Unsaturated.cis(12),
            Unsaturated.trans(15),
            Unsaturated.cis(5, Unsaturation.TWO),
        ]
        expected = FattyAcid(18, bonds)
        for permutation in itertools.permutations(bonds):
            record = FattyAcid(18)
            for bond in permutation:
                record.push(bond)
            assert record == expected
            assert record.unsaturated == sorted(record.unsaturated)

    def test_records_order_by_carbons_then_bonds(self):
        assert FattyAcid(16) < FattyAcid(18)
        assert fatty_acid(18, [9]) < fatty_acid(18, [11])
        assert sorted([fatty_acid(18, [9]), FattyAcid(18), FattyAcid(16)]) == [
            FattyAcid(16),
            FattyAcid(18),
            fatty_acid(18, [9]),
        ]


class TestChainChemistry:
    def test_stearic_acid(self):
        stearic = FattyAcid(18)
        assert stearic.bounds == 17
        assert stearic.unsaturation == 0
        assert stearic.hydrogens == 36
        assert stearic.ecn == 18
        assert stearic.saturated
        assert stearic.omega is None
        expected = (
            18 * RELATIVE_ATOMIC_MASS_C
            + 36 * RELATIVE_ATOMIC_MASS_H
            + 2 * RELATIVE_ATOMIC_MASS_O
        )
        assert math.isclose(stearic.mass, expected)
        assert math.isclose(stearic.mass, 284.484, abs_tol=1e-9)

    def test_linoleic_acid(self):
        linoleic = fatty_acid(18, [9, 12])
        assert linoleic.unsaturation == 2
        assert linoleic.hydrogens == 32
        assert linoleic.ecn == 14
        assert linoleic.omega == 6
        assert not linoleic.saturated

    def test_triple_bond_counts_twice(self):
        ene_yne = fatty_acid(18, [9], [12])
        assert ene_yne.doubles == 1
        assert ene_yne.triples == 1
        assert ene_yne.unsaturation == 3
        assert ene_yne.hydrogens == 30

    def test_omega_uses_highest_known_locant(self):
        record = FattyAcid(18, [Unsaturated.cis(9), Unsaturated(None)])
        assert record.omega == 9


class TestBuilder:
    def test_negative_locant_is_trans(self):
        elaidic = fatty_acid(18, [-9])
        assert elaidic.unsaturated == [Unsaturated.trans(9)]

    def test_second_group_is_triple_bonds(self):
        record = fatty_acid(18, [], [9])
        assert record.unsaturated == [Unsaturated.cis(9, Unsaturation.TWO)]

    def test_zero_locant_rejected(self):
        with pytest.raises(StructuralValidationError, match="zero"):
            fatty_acid(18, [0])

    def test_third_group_rejected(self):
        with pytest.raises(StructuralValidationError, match="degree"):
            fatty_acid(18, [], [], [9])


class TestFattyAcidClass:
    def test_scalar_normalised_to_range(self):
        monoenes = FattyAcidClass(18, 1)
        assert monoenes.kind == "class"
        assert monoenes.carbons_range == (18, 18)
        assert monoenes.unsaturation_range == (1, 1)

    def test_contains(self):
        long_chain_pufa = FattyAcidClass((20, 22), (2, 6))
        assert long_chain_pufa.contains(fatty_acid(22, [4, 7, 10, 13, 16, 19]))
        assert not long_chain_pufa.contains(fatty_acid(18, [9, 12]))
        assert not long_chain_pufa.contains(fatty_acid(20, [11]))

    def test_derived_ranges(self):
        c16_18 = FattyAcidClass((16, 18), (0, 1))
        assert c16_18.bounds_range == (15, 17)
        assert c16_18.hydrogens_range == (30, 36)

    def test_exact_record_is_a_degenerate_specification(self):
        oleic = fatty_acid(18, [9])
        assert oleic.kind == "exact"
        assert oleic.carbons_range == (18, 18)
        assert oleic.unsaturation_range == (1, 1)
        assert oleic.contains(fatty_acid(18, [-11]))

    def test_of_record(self):
        assert FattyAcidClass.of(fatty_acid(18, [9, 12])) == FattyAcidClass(18, 2)

    @pytest.mark.parametrize(
        "carbons, unsaturation",
        [(0, 0), ((18, 16), 0), (18, -1), (18, (3, 1))],
    )
    def test_invalid_ranges(self, carbons, unsaturation):
        with pytest.raises(StructuralValidationError):
            FattyAcidClass(carbons, unsaturation)


class TestSaturatedTable:
    def test_even_chains_two_to_thirty_two(self):
        assert sorted(SATURATED) == list(range(2, 33, 2))
        assert all(record.saturated for record in SATURATED.values())

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            SATURATED[34] = FattyAcid(34)

    def test_saturated_returns_private_copy(self):
        copy = saturated(18)
        copy.push(Unsaturated.cis(9))
        assert SATURATED[18] == FattyAcid(18)
        assert copy != SATURATED[18]

    def test_saturated_outside_table(self):
        assert saturated(17) == FattyAcid(17)

    def test_table_entries_cannot_be_mutated(self):
        SATURATED[18].push(Unsaturated.cis(9))
        assert SATURATED[18].saturated
        assert SATURATED[18] == FattyAcid(18)
