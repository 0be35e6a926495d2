"""Tests for the heterogeneous MixedDataset container."""

from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from tabprep import (
    MISSING,
    Categorical,
    ColumnKind,
    ColumnKindConflictError,
    ErrorKind,
    InvalidDataError,
    LabelCountMismatchError,
    MixedDataset,
    Numeric,
    RowLengthMismatchError,
    TargetNotFoundError,
)


class TestMixedDatasetConstruction:
    """Tests for MixedDataset.from_rows()."""

    def test_kinds_inferred(self, pokemon_dataset):
        """Kinds come from the first non-missing value of each column."""
        kinds = pokemon_dataset.column_kinds
        assert kinds["#"] is ColumnKind.NUMERIC
        assert kinds["Name"] is ColumnKind.CATEGORICAL
        assert kinds["Type 2"] is ColumnKind.CATEGORICAL
        assert kinds["HP"] is ColumnKind.NUMERIC
        assert pokemon_dataset.numeric_columns == ("#", "HP", "Attack")
        assert pokemon_dataset.categorical_columns == ("Name", "Type 1", "Type 2")

    def test_cells_typed(self, pokemon_dataset):
        assert pokemon_dataset.column("HP")[0] == Numeric(45.0)
        assert pokemon_dataset.column("Type 1")[1] == Categorical("Fire")

    def test_missing_cells_in_any_column(self, pokemon_dataset):
        """Empty fields become Missing without changing the column kind."""
        assert pokemon_dataset.column("Type 2")[1] is MISSING
        assert pokemon_dataset.kind_of("Type 2") is ColumnKind.CATEGORICAL

    def test_shape(self, pokemon_dataset):
        assert pokemon_dataset.n_rows == 5
        assert pokemon_dataset.n_columns == 6
        assert len(pokemon_dataset) == 5
        assert pokemon_dataset.labels[-1] == "True"
        assert pokemon_dataset.target_column == "Legendary"

    def test_rows_iteration(self, pokemon_dataset):
        rows = list(pokemon_dataset.rows())
        assert len(rows) == 5
        assert rows[0][1] == Categorical("Bulbasaur")
        assert len(rows[0]) == 6

    def test_first_non_missing_value_decides(self):
        """Leading missing values do not fix the kind."""
        dataset = MixedDataset.from_rows([["NA"], ["3.5"], [""]], columns=["x"])
        assert dataset.kind_of("x") is ColumnKind.NUMERIC
        assert dataset.column("x") == (MISSING, Numeric(3.5), MISSING)

    def test_schema_takes_precedence(self, pokemon_rows, pokemon_columns):
        """An explicit schema overrides inference."""
        dataset = MixedDataset.from_rows(
            pokemon_rows,
            columns=pokemon_columns,
            schema={"#": ColumnKind.CATEGORICAL},
        )
        assert dataset.kind_of("#") is ColumnKind.CATEGORICAL
        assert dataset.column("#")[0] == Categorical("1")

    def test_kind_conflict(self):
        """A later value of another kind fails with ColumnKindConflictError."""
        with pytest.raises(ColumnKindConflictError) as exc_info:
            MixedDataset.from_rows([["1.0"], ["2.0"], ["abc"]], columns=["x"])
        assert exc_info.value.kind is ErrorKind.COLUMN_KIND_CONFLICT
        assert exc_info.value.column == "x"
        assert exc_info.value.row == 2

    def test_schema_conflict(self):
        with pytest.raises(ColumnKindConflictError):
            MixedDataset.from_rows([["abc"]], columns=["x"], schema={"x": ColumnKind.NUMERIC})

    def test_row_length_mismatch(self):
        """Rows of 3 and 4 columns fail with RowLengthMismatchError."""
        with pytest.raises(RowLengthMismatchError) as exc_info:
            MixedDataset.from_rows([["1", "a", "2"], ["1", "a", "2", "x"]])
        assert exc_info.value.row == 1
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 4

    def test_label_count_mismatch(self):
        with pytest.raises(LabelCountMismatchError):
            MixedDataset.from_rows([["1"], ["2"]], labels=["a", "b", "c"])

    def test_unknown_schema_column(self):
        with pytest.raises(InvalidDataError):
            MixedDataset.from_rows([["1"]], columns=["x"], schema={"y": ColumnKind.NUMERIC})

    def test_all_missing_column_is_categorical(self):
        dataset = MixedDataset.from_rows([[""], ["NA"]], columns=["x"])
        assert dataset.kind_of("x") is ColumnKind.CATEGORICAL

    def test_custom_missing_tokens(self):
        dataset = MixedDataset.from_rows([["?"], ["1"]], columns=["x"], missing_tokens={"?"})
        assert dataset.column("x") == (MISSING, Numeric(1.0))

    def test_constructor_rejects_ragged_columns(self):
        """Columns of different lengths fail with RowLengthMismatchError naming the column."""
        kinds = {"a": ColumnKind.NUMERIC, "b": ColumnKind.NUMERIC}
        with pytest.raises(RowLengthMismatchError) as exc_info:
            MixedDataset({"a": [Numeric(1.0)], "b": [Numeric(1.0), Numeric(2.0)]}, kinds)
        assert exc_info.value.kind is ErrorKind.ROW_LENGTH_MISMATCH
        assert exc_info.value.column == "b"
        assert exc_info.value.expected == 1
        assert exc_info.value.actual == 2

    def test_constructor_validates_kinds(self):
        """The typed constructor rejects cells that contradict their kind."""
        with pytest.raises(ColumnKindConflictError):
            MixedDataset({"x": [Categorical("a")]}, {"x": ColumnKind.NUMERIC})


class TestMixedDatasetFrame:
    """Tests for MixedDataset.from_frame()."""

    def test_from_frame(self, mixed_types_frame):
        dataset = MixedDataset.from_frame(mixed_types_frame, target_column="target")
        assert dataset.numeric_columns == ("numeric_1", "numeric_2")
        assert dataset.categorical_columns == ("category_1", "category_2")
        assert dataset.n_rows == len(mixed_types_frame)
        assert set(dataset.labels) <= {"yes", "no"}

    def test_nan_becomes_missing(self):
        frame = pd.DataFrame({"a": [1.0, np.nan], "b": ["x", None]})
        dataset = MixedDataset.from_frame(frame)
        assert dataset.column("a")[1] is MISSING
        assert dataset.column("b")[1] is MISSING

    def test_numeric_dtype_column_can_be_declared_categorical(self):
        frame = pd.DataFrame({"code": [10, 20]})
        dataset = MixedDataset.from_frame(frame, schema={"code": ColumnKind.CATEGORICAL})
        assert dataset.column("code") == (Categorical("10"), Categorical("20"))

    def test_bool_column_is_categorical(self):
        frame = pd.DataFrame({"flag": [True, False]})
        dataset = MixedDataset.from_frame(frame)
        assert dataset.kind_of("flag") is ColumnKind.CATEGORICAL
        assert dataset.column("flag") == (Categorical("True"), Categorical("False"))

    def test_missing_target(self, mixed_types_frame):
        with pytest.raises(TargetNotFoundError):
            MixedDataset.from_frame(mixed_types_frame, target_column="nope")


class TestMixedDatasetDerived:
    """Derived datasets are new objects."""

    def test_with_columns(self, pokemon_dataset):
        replaced = pokemon_dataset.with_columns({"HP": [Numeric(0.0)] * 5})
        assert replaced is not pokemon_dataset
        assert replaced.column("HP")[0] == Numeric(0.0)
        assert pokemon_dataset.column("HP")[0] == Numeric(45.0)
        assert replaced.labels == pokemon_dataset.labels

    def test_column_kinds_read_only(self, pokemon_dataset):
        with pytest.raises(TypeError):
            pokemon_dataset.column_kinds["HP"] = ColumnKind.CATEGORICAL  # type: ignore[index]

    def test_to_dataset(self):
        mixed = MixedDataset.from_rows([["1", "2"], ["NA", "4"]], columns=["a", "b"], labels=[0, 1])
        dataset = mixed.to_dataset()
        assert dataset.columns == ("a", "b")
        assert dataset.data[0, 0] == 1.0
        assert math.isnan(dataset.data[1, 0])
        assert dataset.labels == (0, 1)

    def test_to_dataset_rejects_categorical(self, pokemon_dataset):
        with pytest.raises(ColumnKindConflictError):
            pokemon_dataset.to_dataset()
