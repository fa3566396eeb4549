"""
Test suite for the row-to-record data adapter.
"""

import dataclasses

import numpy as np
import pandas as pd
import pytest

from labeled_histogram import InvalidInputError, Record, records_from_rows
from labeled_histogram.records import format_number


SAMPLE_ROWS = [
    ["Qatar", 86.9],
    ["Ethiopia", 79.4],
    ["Iceland", 77],
    ["Russian Federation", 64.8],
    ["Trinidad and Tobago Republic", 59.1],
]


def test_rows_become_records_in_order():
    """Test that each row becomes one record, in row order."""
    records = records_from_rows(SAMPLE_ROWS)

    assert [r.label for r in records][:3] == ["Qatar", "Ethiopia", "Iceland"]
    assert [r.value for r in records] == [86.9, 79.4, 77.0, 64.8, 59.1]


def test_labels_are_truncated_to_twenty_characters():
    """Test label truncation for display."""
    records = records_from_rows(SAMPLE_ROWS)

    assert records[3].label == "Russian Federation"
    assert records[4].label == "Trinidad and Tobago "
    assert len(records[4].label) == 20


def test_custom_label_length():
    """Test a custom truncation length."""
    records = records_from_rows(SAMPLE_ROWS, label_max_length=3)
    assert [r.label for r in records][:2] == ["Qat", "Eth"]


def test_annotation_uses_full_label_and_value():
    """Test the tooltip annotation text."""
    records = records_from_rows(SAMPLE_ROWS)

    assert records[0].annotation == "Qatar 86.9"
    assert records[2].annotation == "Iceland 77"
    assert records[4].annotation == "Trinidad and Tobago Republic 59.1"


def test_dataframe_input():
    """Test that a pandas DataFrame is accepted."""
    df = pd.DataFrame(SAMPLE_ROWS, columns=["country", "score"])
    records = records_from_rows(df)

    assert len(records) == len(SAMPLE_ROWS)
    assert records[1] == Record("Ethiopia", 79.4, "Ethiopia 79.4")


def test_numpy_object_array_input():
    """Test that a 2D object array is accepted."""
    rows = np.array(SAMPLE_ROWS, dtype=object)
    records = records_from_rows(rows)
    assert records[0].label == "Qatar"


def test_empty_rows():
    """Test that no rows gives no records."""
    assert records_from_rows([]) == []


def test_records_are_immutable():
    """Test that records cannot be modified after creation."""
    record = records_from_rows(SAMPLE_ROWS)[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.value = 1.0


@pytest.mark.parametrize("rows", [
    [["only-label"]],
    [["a", "not a number"]],
    [["a", float("nan")]],
    [["a", float("inf")]],
])
def test_invalid_rows_are_rejected(rows):
    """Test that malformed rows raise InvalidInputError."""
    with pytest.raises(InvalidInputError):
        records_from_rows(rows)


def test_wrong_array_shape_is_rejected():
    """Test that a 1D array is rejected."""
    with pytest.raises(InvalidInputError, match="shape"):
        records_from_rows(np.array([1.0, 2.0]))


@pytest.mark.parametrize("value, expected", [
    (77, "77"),
    (77.0, "77"),
    (86.9, "86.9"),
    (-3.25, "-3.25"),
])
def test_format_number(value, expected):
    """Test short number rendering."""
    assert format_number(value) == expected
