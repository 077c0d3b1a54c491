"""Fatty acid records and fatty acid class specifications.

Two variants of one "fatty acid specification" capability live here:

    FattyAcid        exact structure: a carbon count and its unsaturated bonds
    FattyAcidClass   uncertain structure: inclusive ranges of carbon count and
                     unsaturation, used to match groups of acids

Both expose ``kind``, ``carbons_range``, ``unsaturation_range`` and the
derived ranges, so filters and reports can take either.

Chain chemistry of a free fatty acid ``CcHhO2`` with unsaturation ``U``:
    bounds     B   = C - 1
    hydrogens  H   = 2C - 2U
    ECN            = C - 2U
    mass           = C·M(C) + H·M(H) + 2·M(O)
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..constants import MAX_CARBONS, fatty_acid_mass
from .display import COMMON, Display
from .unsaturation import Isomerism, Unsaturated, Unsaturation, canonical

Range = Tuple[int, int]


class StructuralValidationError(ValueError):
    """Raised when a structure violates a chain invariant."""


class FattyAcidSpecification(ABC):
    """Common interface of exact records and fatty acid classes."""

    kind: str = ""

    @property
    @abstractmethod
    def carbons_range(self) -> Range:
        """Inclusive range of possible carbon counts."""

    @property
    @abstractmethod
    def unsaturation_range(self) -> Range:
        """Inclusive range of possible unsaturation (``U``) values."""

    @property
    def bounds_range(self) -> Range:
        low, high = self.carbons_range
        return (low - 1, high - 1)

    @property
    def hydrogens_range(self) -> Range:
        (c_low, c_high), (u_low, u_high) = self.carbons_range, self.unsaturation_range
        return (max(0, 2 * c_low - 2 * u_high), 2 * c_high - 2 * u_low)

    def contains(self, fatty_acid: "FattyAcid") -> bool:
        """Return True if ``fatty_acid`` falls inside both ranges."""
        c_low, c_high = self.carbons_range
        u_low, u_high = self.unsaturation_range
        return (
            c_low <= fatty_acid.carbons <= c_high
            and u_low <= fatty_acid.unsaturation <= u_high
        )


@total_ordering
@dataclass(eq=True)
class FattyAcid(FattyAcidSpecification):
    """A fatty acid with known carbon count and a canonical bond list.

    The bond list is re-sorted into canonical order after construction and
    after every :meth:`push`, so two records built from the same bonds in
    any order compare equal.

    Args:
        carbons (int): Carbon count, at least 1.
        unsaturated (Iterable[Unsaturated]): Bonds of the chain. Each known
            locant must satisfy ``0 < index < carbons``.

    Raises:
        StructuralValidationError: If the carbon count or a locant is out of
            range.
    """

    carbons: int
    unsaturated: List[Unsaturated] = field(default_factory=list)

    kind = "exact"

    def __post_init__(self) -> None:
        carbons = int(self.carbons)
        if carbons < 1 or carbons > MAX_CARBONS:
            raise StructuralValidationError(
                f"Carbon count must be in 1..{MAX_CARBONS}, got {self.carbons}"
            )
        self.carbons = carbons
        bonds = list(self.unsaturated)
        for bond in bonds:
            self._check(bond)
        self.unsaturated = canonical(bonds)

    def _check(self, bond: Unsaturated) -> None:
        if not isinstance(bond, Unsaturated):
            raise TypeError(f"Expected Unsaturated, got {type(bond).__name__}")
        if bond.index is None:
            return
        if bond.index == 0:
            raise StructuralValidationError("Bond locant cannot be zero")
        if bond.index >= self.carbons:
            raise StructuralValidationError(
                f"Bond locant {bond.index} must be less than the carbon count "
                f"{self.carbons}"
            )
        if bond.index < 0:
            raise StructuralValidationError(
                f"Bond locant cannot be negative, got {bond.index}"
            )

    def push(self, bond: Unsaturated) -> None:
        """Add ``bond`` and restore canonical order."""
        self._check(bond)
        self.unsaturated.append(bond)
        self.unsaturated = canonical(self.unsaturated)

    @property
    def carbons_range(self) -> Range:
        return (self.carbons, self.carbons)

    @property
    def unsaturation_range(self) -> Range:
        u = self.unsaturation
        return (u, u)

    @property
    def bounds(self) -> int:
        """Number of carbon-carbon bonds, ``C - 1``."""
        return self.carbons - 1

    @property
    def unsaturation(self) -> int:
        """Degrees of unsaturation ``U``; triple bonds count twice."""
        return sum(bond.degree for bond in self.unsaturated)

    @property
    def doubles(self) -> int:
        return sum(1 for bond in self.unsaturated if bond.degree == 1)

    @property
    def triples(self) -> int:
        return sum(1 for bond in self.unsaturated if bond.degree == 2)

    @property
    def hydrogens(self) -> int:
        """``H = 2C - 2U``."""
        return 2 * self.carbons - 2 * self.unsaturation

    @property
    def ecn(self) -> int:
        """Equivalent carbon number, ``ECN = C - 2U``."""
        return self.carbons - 2 * self.unsaturation

    @property
    def mass(self) -> float:
        return fatty_acid_mass(self.carbons, self.hydrogens)

    @property
    def saturated(self) -> bool:
        return self.unsaturation == 0

    @property
    def omega(self) -> Optional[int]:
        """n-x family from the bond nearest the methyl end.

        Returns:
            Optional[int]: ``C - max(index)``, or ``None`` when no locant is
            known.
        """
        indices = [bond.index for bond in self.unsaturated if bond.index is not None]
        if not indices:
            return None
        return self.carbons - max(indices)

    def sort_key(self):
        return (self.carbons, tuple(bond.sort_key() for bond in self.unsaturated))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FattyAcid):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __format__(self, format_spec: str) -> str:
        return format(Display(self, COMMON), format_spec)

    def __str__(self) -> str:
        return format(self, "")


@dataclass(frozen=True)
class FattyAcidClass(FattyAcidSpecification):
    """A range of fatty acids, e.g. "C16-C18 monoenes".

    Args:
        carbons: Carbon count or inclusive ``(low, high)`` range; both ends
            at least 1.
        unsaturation: Unsaturation ``U`` or inclusive ``(low, high)`` range;
            both ends at least 0.

    Raises:
        StructuralValidationError: If a range is empty or below its floor.
    """

    carbons: Union[int, Range]
    unsaturation: Union[int, Range] = 0

    kind = "class"

    def __post_init__(self) -> None:
        carbons = _as_range(self.carbons)
        unsaturation = _as_range(self.unsaturation)
        if carbons[0] < 1:
            raise StructuralValidationError(
                f"Carbon range must start at 1 or above, got {carbons}"
            )
        if unsaturation[0] < 0:
            raise StructuralValidationError(
                f"Unsaturation range cannot be negative, got {unsaturation}"
            )
        for name, (low, high) in (("carbon", carbons), ("unsaturation", unsaturation)):
            if low > high:
                raise StructuralValidationError(
                    f"Empty {name} range: {low} > {high}"
                )
        object.__setattr__(self, "carbons", carbons)
        object.__setattr__(self, "unsaturation", unsaturation)

    @property
    def carbons_range(self) -> Range:
        return self.carbons

    @property
    def unsaturation_range(self) -> Range:
        return self.unsaturation

    @classmethod
    def of(cls, fatty_acid: FattyAcid) -> "FattyAcidClass":
        """Return the narrowest class containing ``fatty_acid``."""
        return cls(fatty_acid.carbons, fatty_acid.unsaturation)


def _as_range(value: Union[int, Sequence[int]]) -> Range:
    if isinstance(value, int):
        return (value, value)
    low, high = value
    return (int(low), int(high))


def fatty_acid(carbons: int, *groups: Iterable[int]) -> FattyAcid:
    """Build a fatty acid from signed locants grouped by bond degree.

    Group ``k`` (counting from 1) holds the locants of bonds with
    unsaturation ``k``. A positive locant is a cis bond, a negative one a
    trans bond.

    Args:
        carbons (int): Carbon count.
        *groups: Locant groups; the first lists double bonds, the second
            triple bonds.

    Returns:
        FattyAcid: The canonical record.

    Raises:
        StructuralValidationError: If a locant is zero or not strictly inside
            the chain, or a group beyond the second is given.

    Examples:
        ``fatty_acid(18, [9, 12])`` is linoleic acid (18:2Δ9,12),
        ``fatty_acid(18, [-9])`` elaidic acid and ``fatty_acid(18, [9], [12])``
        an ene-yne rendered 18:2Δ9,12.
    """
    record = FattyAcid(carbons)
    for degree, locants in enumerate(groups, start=1):
        unsaturation = Unsaturation.from_code(degree)
        if unsaturation is None:
            raise StructuralValidationError(
                f"Bond degree must be 1 or 2, got group {degree}"
            )
        for locant in locants:
            if locant == 0:
                raise StructuralValidationError("Bond locant cannot be zero")
            isomerism = Isomerism.CIS if locant > 0 else Isomerism.TRANS
            record.push(Unsaturated(abs(locant), isomerism, unsaturation))
    return record


class _SaturatedTable(Mapping):
    """Read-only carbon count to saturated record table.

    Lookups return a fresh copy, so pushing a bond onto a looked-up record
    never reaches the table.
    """

    def __init__(self, carbons: Iterable[int]):
        self._records = {c: FattyAcid(c) for c in carbons}

    def __getitem__(self, carbons: int) -> FattyAcid:
        return copy.deepcopy(self._records[carbons])

    def __iter__(self):
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"_SaturatedTable({sorted(self._records)})"


# C2:0 ... C32:0
SATURATED: Mapping[int, FattyAcid] = _SaturatedTable(range(2, 33, 2))


def saturated(carbons: int) -> FattyAcid:
    """Return a private saturated record with ``carbons`` carbons."""
    if carbons in SATURATED:
        return SATURATED[carbons]
    return FattyAcid(carbons)
