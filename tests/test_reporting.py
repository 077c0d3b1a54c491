"""Tests for reporting-layer nomenclature and index formatting."""

import math

import numpy as np
import pandas as pd
import pytest

from fatty.chemistry.fatty_acid import FattyAcid, fatty_acid
from fatty.columnar import profile_frame
from fatty.reporting import (
    add_nomenclature_columns,
    format_index_value,
    format_indices,
)


def test_add_nomenclature_columns():
    frame = profile_frame(
        [FattyAcid(18), fatty_acid(18, [9]), None], values={"Value": [1.0, 2.0, 3.0]}
    )
    out = add_nomenclature_columns(frame)

    assert out["ID"].tolist() == ["c18u0", "c18u1c9", None]
    assert out["Common"].tolist() == ["18:0", "18:1Δ9", None]
    assert out["U"].tolist() == [0, 1, pd.NA]
    assert out["ECN"].tolist() == [18, 16, pd.NA]
    assert math.isclose(out.loc[0, "Mass"], FattyAcid(18).mass)
    assert "ID" not in frame.columns


def test_add_nomenclature_columns_compact_padded():
    frame = profile_frame([fatty_acid(18, [9])])
    out = add_nomenclature_columns(frame, width=2, expanded=False)
    assert out.loc[0, "Common"] == "18:01"
    assert out.loc[0, "ID"] == "c18u01"


def test_format_index_value():
    assert format_index_value(0.5) == "0.500"
    assert format_index_value(1 / 3, decimals=1) == "0.3"
    assert format_index_value(np.nan) == "undefined"
    assert format_index_value(np.inf) == "undefined"


def test_format_indices():
    table = pd.DataFrame({"A": [0.5, np.nan], "B": [1.0, 2.0]}, index=["HPI", "IA"])
    out = format_indices(table, decimals=2, columns=["A"])
    assert list(out.columns) == ["A"]
    assert out["A"].tolist() == ["0.50", "undefined"]
    assert table.loc["IA", "B"] == 2.0


def test_format_indices_missing_column():
    table = pd.DataFrame({"A": [0.5]}, index=["HPI"])
    with pytest.raises(KeyError, match="Missing value column"):
        format_indices(table, columns=["B"])


def test_format_indices_negative_decimals():
    with pytest.raises(ValueError, match="decimals"):
        format_indices(pd.DataFrame({"A": [0.5]}), decimals=-1)
