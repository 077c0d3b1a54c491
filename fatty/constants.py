"""Centralized chemical constants."""

from __future__ import annotations

# IUPAC standard atomic weights (abridged, isotope-averaged), g mol^-1.
RELATIVE_ATOMIC_MASS_C: float = 12.011
RELATIVE_ATOMIC_MASS_H: float = 1.008
RELATIVE_ATOMIC_MASS_O: float = 15.999

# Oxygen atoms in the carboxyl group of a free fatty acid.
CARBOXYL_OXYGENS: int = 2

# Carbons column is stored as an unsigned 8-bit integer.
MAX_CARBONS: int = 255


def fatty_acid_mass(carbons: int, hydrogens: int) -> float:
    """Return the molar mass of a free fatty acid ``C(c)H(h)O2``.

    Args:
        carbons (int): Number of carbon atoms in the chain.
        hydrogens (int): Number of hydrogen atoms.

    Returns:
        float: Molar mass in g mol^-1.

    Note:
        The carboxyl oxygen pair is fixed at two atoms, so only carbon and
        hydrogen counts vary between acids.

    References:
        IUPAC standard atomic weights (abridged to five significant figures).
    """
    return (
        carbons * RELATIVE_ATOMIC_MASS_C
        + hydrogens * RELATIVE_ATOMIC_MASS_H
        + CARBOXYL_OXYGENS * RELATIVE_ATOMIC_MASS_O
    )
