"""Value types describing one unsaturated bond of a fatty acid chain.

A bond is described by three independently optional facts:

    index         carbon locant, counted from the carboxyl carbon (Δ numbering)
    isomerism     cis/trans geometry of a double bond
    unsaturation  degree of the bond, one for C=C and two for C≡C

Any of the three may be unknown. Bonds carry no validation of their own; the
locant range depends on the chain length and is checked by the owning
:class:`~fatty.chemistry.fatty_acid.FattyAcid`.

Canonical order:
    Bonds sort by ``(unsaturation, isomerism, index)``. Inside each component
    an unknown value sorts before any known one, and enum members sort in
    declaration order (``ONE < TWO``, ``CIS < TRANS``). Nomenclature rendering
    and record equality both rely on this order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Optional, Tuple


class Isomerism(Enum):
    """Geometry of a double bond, valued by its storage code."""

    CIS = 1
    TRANS = -1

    @property
    def rank(self) -> int:
        return 0 if self is Isomerism.CIS else 1

    @property
    def marker(self) -> str:
        return "c" if self is Isomerism.CIS else "t"

    @classmethod
    def from_code(cls, code: Optional[int]) -> Optional["Isomerism"]:
        """Decode a signed geometry code; positive is cis, negative trans."""
        if code is None or code == 0:
            return None
        return cls.CIS if code > 0 else cls.TRANS


class Unsaturation(Enum):
    """Degree of unsaturation contributed by one bond."""

    ONE = 1
    TWO = 2

    @property
    def rank(self) -> int:
        return self.value - 1

    @classmethod
    def from_code(cls, code: Optional[int]) -> Optional["Unsaturation"]:
        """Decode ``1``/``2``; any other code is treated as unknown."""
        if code == 1:
            return cls.ONE
        if code == 2:
            return cls.TWO
        return None


SortKey = Tuple[Tuple[bool, int], Tuple[bool, int], Tuple[bool, int]]


@total_ordering
@dataclass(frozen=True)
class Unsaturated:
    """One unsaturated bond."""

    index: Optional[int] = None
    isomerism: Optional[Isomerism] = None
    unsaturation: Optional[Unsaturation] = None

    @classmethod
    def from_codes(
        cls,
        index: Optional[int] = None,
        isomerism: Optional[int] = None,
        unsaturation: Optional[int] = None,
    ) -> "Unsaturated":
        """Build a bond from the integer codes used in columnar storage."""
        return cls(
            index=None if index is None else int(index),
            isomerism=Isomerism.from_code(isomerism),
            unsaturation=Unsaturation.from_code(unsaturation),
        )

    @classmethod
    def cis(cls, index: int, unsaturation: Unsaturation = Unsaturation.ONE):
        return cls(index, Isomerism.CIS, unsaturation)

    @classmethod
    def trans(cls, index: int, unsaturation: Unsaturation = Unsaturation.ONE):
        return cls(index, Isomerism.TRANS, unsaturation)

    @property
    def degree(self) -> int:
        """Degrees of unsaturation contributed by this bond (1 or 2)."""
        return (self.unsaturation or Unsaturation.ONE).value

    def codes(self) -> Tuple[Optional[int], Optional[int], Optional[int]]:
        """Return ``(index, isomerism, unsaturation)`` storage codes."""
        return (
            self.index,
            None if self.isomerism is None else self.isomerism.value,
            None if self.unsaturation is None else self.unsaturation.value,
        )

    def sort_key(self) -> SortKey:
        return (
            _rank(self.unsaturation),
            _rank(self.isomerism),
            (False, 0) if self.index is None else (True, self.index),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Unsaturated):
            return NotImplemented
        return self.sort_key() < other.sort_key()


def _rank(member) -> Tuple[bool, int]:
    # absent < present
    if member is None:
        return (False, 0)
    return (True, member.rank)


def canonical(bonds) -> list:
    """Return ``bonds`` as a new list in canonical order."""
    return sorted(bonds, key=Unsaturated.sort_key)
