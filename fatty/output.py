"""Write profiles and index tables to reproducible CSV files.

This module is the output boundary between in-memory tables and exported
artifacts.
"""

from __future__ import annotations

import logging
import os
from typing import Tuple

import pandas as pd

from .reference import to_flat_frame
from .reporting import UNDEFINED, add_nomenclature_columns

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "output"


def save_results_to_csv(
    profile_df: pd.DataFrame,
    indices_df: pd.DataFrame,
    output_dir: str = DEFAULT_OUTPUT_DIR,
    width: int = 0,
    expanded: bool = True,
) -> Tuple[str, str]:
    """Save a profile and its index table to CSV files.

    Args:
        profile_df (pandas.DataFrame): Profile in columnar form.
        indices_df (pandas.DataFrame): Output of ``indices_table``.
        output_dir (str): Directory where CSV outputs are written.
        width (int): Zero-padding width of the nomenclature columns.
        expanded (bool): Include bond locants in the nomenclature columns.

    Returns:
        tuple[str, str]: Paths to ``profile.csv`` and ``indices.csv``.

    Note:
        The profile is written in the flat format read by
        :func:`fatty.reference.load_profile`, with the ``ID``, ``Common``,
        ``Mass``, ``ECN`` and ``U`` report columns appended. Undefined indices
        are written as ``"undefined"``.
    """
    os.makedirs(output_dir, exist_ok=True)

    profile_path = os.path.join(output_dir, "profile.csv")
    indices_path = os.path.join(output_dir, "indices.csv")

    profile_report = add_nomenclature_columns(
        profile_df, width=width, expanded=expanded
    )
    to_flat_frame(profile_report).to_csv(profile_path, index=False)
    indices_df.to_csv(indices_path, index=True, na_rep=UNDEFINED)

    logger.info("Saved profile to %s", profile_path)
    logger.info("Saved indices to %s", indices_path)

    return profile_path, indices_path
