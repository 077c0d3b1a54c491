"""Render fatty acid structures as nomenclature strings.

A rendering is assembled from the carbon count, the number of unsaturated
bonds (double and triple alike) and, in expanded mode, the locant list:

    <c><carbons><u><bonds>[<i0><locant>{<i1><locant>}]

The separators, the side of the locant on which the geometry marker is
written, and whether cis is written out are all configurable through
:class:`Options`. Two presets are provided:

    ID      c18u1c9     prefix geometry, explicit cis, letter separators
    COMMON  18:1Δ9      suffix geometry, implicit cis, Δ and comma separators

Rendering never fails on partially known bonds: an unknown locant renders as
an empty string and an unknown geometry renders no marker.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from .unsaturation import Isomerism, Unsaturated

if TYPE_CHECKING:
    from .fatty_acid import FattyAcid

_FORMAT_SPEC = re.compile(r"^(?P<alternate>#)?0?(?P<width>\d*)$")


class Notation(Enum):
    """Side of the locant on which the geometry marker is written."""

    PREFIX = "prefix"
    SUFFIX = "suffix"


class Elision(Enum):
    """Whether the default (cis) geometry is written out."""

    EXPLICIT = "explicit"
    IMPLICIT = "implicit"


@dataclass(frozen=True)
class Separators:
    c: str
    u: str
    i: Tuple[str, str]


@dataclass(frozen=True)
class Options:
    separators: Separators
    notation: Notation
    elision: Elision


ID = Options(
    separators=Separators(c="c", u="u", i=("", "")),
    notation=Notation.PREFIX,
    elision=Elision.EXPLICIT,
)

COMMON = Options(
    separators=Separators(c="", u=":", i=("Δ", ",")),
    notation=Notation.SUFFIX,
    elision=Elision.IMPLICIT,
)


def _pad(value: Optional[int], width: int) -> str:
    if value is None:
        return ""
    return str(value).zfill(width)


def _marker(isomerism: Optional[Isomerism], elision: Elision) -> str:
    if isomerism is None:
        return ""
    if isomerism is Isomerism.CIS and elision is Elision.IMPLICIT:
        return ""
    return isomerism.marker


def render_bond(bond: Unsaturated, options: Options, width: int = 0) -> str:
    """Render one locant with its geometry marker, without separators."""
    locant = _pad(bond.index, width)
    marker = _marker(bond.isomerism, options.elision)
    if options.notation is Notation.PREFIX:
        return marker + locant
    return locant + marker


def render(
    fatty_acid: "FattyAcid",
    options: Options = COMMON,
    width: int = 0,
    expanded: bool = False,
) -> str:
    """Render ``fatty_acid`` under ``options``.

    Args:
        fatty_acid (FattyAcid): Record to render; its bonds are expected in
            canonical order.
        options (Options): Separator and geometry configuration.
        width (int): Minimum width of every numeric field, zero-padded.
        expanded (bool): Append the locant list after the counts.

    Returns:
        str: The nomenclature string, e.g. ``"18:1"`` or ``"c18u1c9"``.
    """
    separators = options.separators
    parts = [separators.c, _pad(fatty_acid.carbons, width)]
    parts += [separators.u, _pad(len(fatty_acid.unsaturated), width)]

    if expanded:
        for position, bond in enumerate(fatty_acid.unsaturated):
            parts.append(separators.i[0] if position == 0 else separators.i[1])
            parts.append(render_bond(bond, options, width))
    return "".join(parts)


class Display:
    """Deferred rendering of a record under fixed options.

    ``str()`` gives the compact form; ``format()`` accepts ``"#"`` for the
    expanded form and a width for zero-padding, so ``format(d, "#02")`` on
    oleic acid gives ``"18:01Δ09"``.
    """

    def __init__(self, fatty_acid: "FattyAcid", options: Options = COMMON):
        self.fatty_acid = fatty_acid
        self.options = options

    def __str__(self) -> str:
        return render(self.fatty_acid, self.options)

    def __format__(self, format_spec: str) -> str:
        match = _FORMAT_SPEC.match(format_spec)
        if match is None:
            raise ValueError(f"Invalid format specifier {format_spec!r} for fatty acid")
        width = int(match.group("width") or 0)
        return render(
            self.fatty_acid,
            self.options,
            width=width,
            expanded=bool(match.group("alternate")),
        )

    def __repr__(self) -> str:
        return f"Display({self.fatty_acid!r}, {self.options!r})"


def display(fatty_acid: "FattyAcid", options: Options = COMMON) -> Display:
    return Display(fatty_acid, options)
