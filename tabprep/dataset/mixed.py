"""Heterogeneous-column container built from MixedValue cells."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any, Generic, TypeVar

import numpy as np
import pandas as pd
from numpy.typing import DTypeLike

from ..core.values import (
    DEFAULT_MISSING_TOKENS,
    ColumnKind,
    MixedValue,
    Numeric,
    coerce_value,
    infer_kind,
)
from ..errors import (
    ColumnKindConflictError,
    InvalidDataError,
    LabelCountMismatchError,
    RowLengthMismatchError,
    TargetNotFoundError,
)
from .dataset import Dataset

logger = logging.getLogger(__name__)

Y = TypeVar("Y")


class MixedDataset(Generic[Y]):
    """Columns of MixedValue cells paired with optional labels.

    Each column has a ColumnKind recorded once at construction. Cells in a
    column are either of that kind or Missing. Storage is column-major and
    immutable; operations that change data return a new MixedDataset.
    """

    __slots__ = ("_columns", "_names", "_kinds", "_labels", "_target_column", "_n_rows")

    def __init__(
        self,
        columns: Mapping[str, Sequence[MixedValue]],
        kinds: Mapping[str, ColumnKind],
        labels: Sequence[Y] | None = None,
        target_column: str | None = None,
    ) -> None:
        """Initialize from already-typed columns.

        Most callers should use from_rows() or from_frame(), which coerce raw
        fields. This constructor only validates shapes and kinds.

        Args:
            columns: Column name to cells, in column order.
            kinds: Column name to declared kind.
            labels: Optional labels, one per row.
            target_column: Name of the label column.

        Raises:
            RowLengthMismatchError: If columns differ in length.
            LabelCountMismatchError: If label count differs from row count.
            ColumnKindConflictError: If a cell doesn't match its column kind.
            InvalidDataError: If a column has no declared kind.
        """
        names = tuple(str(name) for name in columns)
        stored: dict[str, tuple[MixedValue, ...]] = {}
        n_rows: int | None = None

        for name, cells in columns.items():
            name = str(name)
            if name not in kinds:
                raise InvalidDataError(f"no kind declared for column '{name}'")
            kind = kinds[name]
            values = tuple(cells)
            if n_rows is None:
                n_rows = len(values)
            elif len(values) != n_rows:
                raise RowLengthMismatchError(None, n_rows, len(values), column=name)
            for row, value in enumerate(values):
                implied = infer_kind(value)
                if implied is not None and implied is not kind:
                    raise ColumnKindConflictError(
                        f"{implied.value} value in a {kind.value} column", column=name, row=row
                    )
            stored[name] = values

        row_count = n_rows or 0
        label_tuple: tuple[Y, ...] | None = None
        if labels is not None:
            label_tuple = tuple(labels)
            if len(label_tuple) != row_count:
                raise LabelCountMismatchError(row_count, len(label_tuple))

        self._columns = stored
        self._names = names
        self._kinds = MappingProxyType({name: kinds[name] for name in names})
        self._labels = label_tuple
        self._target_column = target_column
        self._n_rows = row_count

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Sequence[Any]],
        labels: Sequence[Y] | None = None,
        columns: Sequence[str] | None = None,
        schema: Mapping[str, ColumnKind] | None = None,
        target_column: str | None = None,
        missing_tokens: Collection[str] = DEFAULT_MISSING_TOKENS,
    ) -> MixedDataset[Y]:
        """Build a dataset from row-major raw fields.

        A column's kind comes from ``schema`` when it names the column,
        otherwise from the first non-missing value in that column. Columns
        with no non-missing value default to CATEGORICAL.

        Args:
            rows: Rows of raw fields (text, numbers, None or MixedValues).
            labels: Optional labels, one per row.
            columns: Column names. Defaults to feature_0..n-1.
            schema: Explicit column kinds; takes precedence over inference.
            target_column: Name of the label column.
            missing_tokens: Text tokens treated as Missing.

        Raises:
            RowLengthMismatchError: If a row's length differs from the schema.
            LabelCountMismatchError: If label count differs from row count.
            ColumnKindConflictError: If a value conflicts with its column kind.
            InvalidDataError: If the schema names an unknown column.
        """
        materialized = [tuple(row) for row in rows]
        if columns is not None:
            names = [str(c) for c in columns]
        else:
            names = [f"feature_{i}" for i in range(len(materialized[0]) if materialized else 0)]
        width = len(names)

        for index, row in enumerate(materialized):
            if len(row) != width:
                raise RowLengthMismatchError(index, width, len(row))

        if schema:
            unknown = [name for name in schema if name not in names]
            if unknown:
                raise InvalidDataError(f"schema names unknown columns: {unknown}")

        if labels is not None and len(labels) != len(materialized):
            raise LabelCountMismatchError(len(materialized), len(labels))

        cells: dict[str, list[MixedValue]] = {}
        kinds: dict[str, ColumnKind] = {}
        for col_index, name in enumerate(names):
            kind = schema.get(name) if schema else None
            values: list[MixedValue] = []
            for row_index, row in enumerate(materialized):
                try:
                    value = coerce_value(row[col_index], kind, missing_tokens)
                except ColumnKindConflictError as e:
                    raise ColumnKindConflictError(e.message, column=name, row=row_index) from e
                if kind is None:
                    kind = infer_kind(value)
                values.append(value)

            if kind is None:
                if materialized:
                    logger.warning(f"Column '{name}' holds only missing values; treating it as categorical")
                kind = ColumnKind.CATEGORICAL
            cells[name] = values
            kinds[name] = kind

        logger.debug(
            f"Built mixed dataset with {len(materialized)} rows, "
            f"{sum(k is ColumnKind.NUMERIC for k in kinds.values())} numeric and "
            f"{sum(k is ColumnKind.CATEGORICAL for k in kinds.values())} categorical columns"
        )
        return cls(cells, kinds, labels=labels, target_column=target_column)

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        target_column: str | None = None,
        schema: Mapping[str, ColumnKind] | None = None,
        missing_tokens: Collection[str] = DEFAULT_MISSING_TOKENS,
    ) -> MixedDataset[Any]:
        """Build a dataset from a pandas DataFrame.

        Numeric pandas dtypes produce NUMERIC columns and everything else is
        inferred from values, unless ``schema`` names the column.

        Raises:
            TargetNotFoundError: If target_column is not in the frame.
        """
        labels: list[Any] | None = None
        features = frame
        if target_column is not None:
            if target_column not in frame.columns:
                raise TargetNotFoundError(target_column, [str(c) for c in frame.columns])
            labels = frame[target_column].tolist()
            features = frame.drop(columns=[target_column])

        resolved: dict[str, ColumnKind] = {}
        converted = features.astype(object)
        for col in features.columns:
            if pd.api.types.is_bool_dtype(features[col]):
                converted[col] = features[col].map(str)
                resolved[str(col)] = ColumnKind.CATEGORICAL
            elif pd.api.types.is_numeric_dtype(features[col]):
                resolved[str(col)] = ColumnKind.NUMERIC
        if schema:
            resolved.update(schema)
        for col in features.columns:
            if resolved.get(str(col)) is ColumnKind.CATEGORICAL and pd.api.types.is_numeric_dtype(features[col]):
                converted[col] = features[col].map(str)

        converted = converted.where(features.notna(), None)
        rows = converted.itertuples(index=False, name=None)
        return cls.from_rows(
            rows,
            labels=labels,
            columns=[str(c) for c in features.columns],
            schema=resolved,
            target_column=target_column,
            missing_tokens=missing_tokens,
        )

    @property
    def columns(self) -> tuple[str, ...]:
        return self._names

    @property
    def column_kinds(self) -> Mapping[str, ColumnKind]:
        """Read-only mapping of column name to kind."""
        return self._kinds

    @property
    def numeric_columns(self) -> tuple[str, ...]:
        return tuple(n for n in self._names if self._kinds[n] is ColumnKind.NUMERIC)

    @property
    def categorical_columns(self) -> tuple[str, ...]:
        return tuple(n for n in self._names if self._kinds[n] is ColumnKind.CATEGORICAL)

    @property
    def labels(self) -> tuple[Y, ...] | None:
        return self._labels

    @property
    def has_labels(self) -> bool:
        return self._labels is not None

    @property
    def target_column(self) -> str | None:
        return self._target_column

    @property
    def n_rows(self) -> int:
        return self._n_rows

    @property
    def n_columns(self) -> int:
        return len(self._names)

    def kind_of(self, column: str) -> ColumnKind:
        if column not in self._kinds:
            raise InvalidDataError(f"unknown column '{column}'")
        return self._kinds[column]

    def column(self, column: str) -> tuple[MixedValue, ...]:
        """Cells of one column, top to bottom."""
        if column not in self._columns:
            raise InvalidDataError(f"unknown column '{column}'")
        return self._columns[column]

    def rows(self) -> Iterator[tuple[MixedValue, ...]]:
        """Iterate over rows as tuples of cells in column order."""
        columns = [self._columns[name] for name in self._names]
        return zip(*columns)

    def with_columns(
        self,
        columns: Mapping[str, Sequence[MixedValue]],
        kinds: Mapping[str, ColumnKind] | None = None,
    ) -> MixedDataset[Y]:
        """Return a new dataset with some or all columns replaced.

        Columns not named keep their current cells. Kinds default to the
        current kinds.
        """
        merged: dict[str, Sequence[MixedValue]] = {name: self._columns[name] for name in self._names}
        merged.update(columns)
        merged_kinds = dict(self._kinds)
        if kinds:
            merged_kinds.update(kinds)
        return MixedDataset(merged, merged_kinds, labels=self._labels, target_column=self._target_column)

    def to_dataset(self, dtype: DTypeLike = np.float64) -> Dataset[Y]:
        """Convert an all-numeric dataset to a Dataset (Missing becomes NaN).

        Raises:
            ColumnKindConflictError: If any column is categorical.
        """
        categorical = self.categorical_columns
        if categorical:
            raise ColumnKindConflictError(
                f"cannot convert categorical columns {list(categorical)} to a numeric Dataset"
            )
        matrix = np.full((self._n_rows, self.n_columns), np.nan, dtype=dtype)
        for col_index, name in enumerate(self._names):
            for row_index, value in enumerate(self._columns[name]):
                if isinstance(value, Numeric):
                    matrix[row_index, col_index] = value.value
        return Dataset(matrix, labels=self._labels, columns=self._names, target_column=self._target_column)

    def __len__(self) -> int:
        return self._n_rows

    def __repr__(self) -> str:
        return (
            f"MixedDataset(rows={self._n_rows}, numeric={len(self.numeric_columns)}, "
            f"categorical={len(self.categorical_columns)}, labels={self.has_labels})"
        )
