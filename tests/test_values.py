"""Tests for mixed cell values and raw field coercion."""

from __future__ import annotations

import math

import numpy as np
import pytest

from tabprep import (
    MISSING,
    Categorical,
    ColumnKind,
    ColumnKindConflictError,
    ErrorKind,
    Missing,
    Numeric,
    ValueKind,
    coerce_value,
)
from tabprep.core import infer_kind, is_missing


class TestVariants:
    """Tests for the Numeric / Categorical / Missing variants."""

    def test_kinds(self):
        """Each variant reports its tag."""
        assert Numeric(1.0).kind is ValueKind.NUMERIC
        assert Categorical("a").kind is ValueKind.CATEGORICAL
        assert MISSING.kind is ValueKind.MISSING

    def test_numeric_stores_float(self):
        """Numeric converts ints to float."""
        value = Numeric(3)
        assert isinstance(value.value, float)
        assert value == Numeric(3.0)

    def test_missing_instances_equal(self):
        """All Missing values compare equal."""
        assert Missing() == MISSING
        assert hash(Missing()) == hash(MISSING)

    def test_variants_are_frozen(self):
        """Cells cannot be mutated."""
        with pytest.raises(AttributeError):
            Numeric(1.0).value = 2.0  # type: ignore[misc]

    def test_infer_kind(self):
        assert infer_kind(Numeric(1.0)) is ColumnKind.NUMERIC
        assert infer_kind(Categorical("x")) is ColumnKind.CATEGORICAL
        assert infer_kind(MISSING) is None


class TestIsMissing:
    """Tests for missing detection."""

    @pytest.mark.parametrize("raw", [None, "", "  ", "NA", "NaN", "null", float("nan"), MISSING])
    def test_missing_values(self, raw):
        assert is_missing(raw)

    @pytest.mark.parametrize("raw", ["0", "a", 0, 0.0, Numeric(1.0)])
    def test_present_values(self, raw):
        assert not is_missing(raw)

    def test_custom_tokens(self):
        """Custom tokens replace the defaults."""
        assert is_missing("?", missing_tokens={"?"})
        assert not is_missing("NA", missing_tokens={"?"})


class TestCoerceValue:
    """Tests for coerce_value()."""

    def test_undecided_number_text(self):
        """Float-parsable text becomes Numeric when the kind is undecided."""
        assert coerce_value("5.1") == Numeric(5.1)
        assert coerce_value(" 42 ") == Numeric(42.0)

    def test_undecided_other_text(self):
        """Other text becomes Categorical, stripped."""
        assert coerce_value(" Grass ") == Categorical("Grass")

    def test_python_numbers(self):
        assert coerce_value(3) == Numeric(3.0)
        assert coerce_value(np.float32(1.5)) == Numeric(1.5)

    def test_missing_regardless_of_kind(self):
        """Missing tokens become MISSING in any column."""
        assert coerce_value("NA", ColumnKind.NUMERIC) is MISSING
        assert coerce_value("", ColumnKind.CATEGORICAL) is MISSING
        assert coerce_value(None) is MISSING

    def test_numeric_column_rejects_text(self):
        """Non-numeric text in a numeric column is a conflict."""
        with pytest.raises(ColumnKindConflictError) as exc_info:
            coerce_value("abc", ColumnKind.NUMERIC)
        assert exc_info.value.kind is ErrorKind.COLUMN_KIND_CONFLICT

    def test_categorical_column_keeps_digits_as_text(self):
        """Text in a categorical column stays categorical even if it looks numeric."""
        assert coerce_value("7", ColumnKind.CATEGORICAL) == Categorical("7")

    def test_categorical_column_rejects_numbers(self):
        with pytest.raises(ColumnKindConflictError):
            coerce_value(7.0, ColumnKind.CATEGORICAL)

    def test_existing_values_checked_against_kind(self):
        """MixedValues pass through unless they conflict."""
        assert coerce_value(Numeric(1.0), ColumnKind.NUMERIC) == Numeric(1.0)
        with pytest.raises(ColumnKindConflictError):
            coerce_value(Categorical("a"), ColumnKind.NUMERIC)

    def test_booleans_rejected(self):
        with pytest.raises(ColumnKindConflictError):
            coerce_value(True)

    def test_unsupported_type_rejected(self):
        with pytest.raises(ColumnKindConflictError):
            coerce_value(object())

    def test_nan_is_missing(self):
        assert coerce_value(math.nan, ColumnKind.NUMERIC) is MISSING
