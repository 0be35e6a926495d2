"""Homogeneous feature container."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any, Generic, TypeVar

import numpy as np
import pandas as pd
from numpy.typing import DTypeLike, NDArray

from ..errors import (
    InvalidDataError,
    LabelCountMismatchError,
    RowLengthMismatchError,
    TargetNotFoundError,
)

logger = logging.getLogger(__name__)

Y = TypeVar("Y")

DEFAULT_TARGET_NAME = "target"


def _default_columns(count: int) -> tuple[str, ...]:
    return tuple(f"feature_{i}" for i in range(count))


def _frozen(array: NDArray[Any]) -> NDArray[Any]:
    array = np.array(array, copy=True)
    array.setflags(write=False)
    return array


class Dataset(Generic[Y]):
    """Feature matrix paired with optional labels.

    All features share one element kind, the dtype of the matrix (float64
    unless requested otherwise). Labels, when present, hold one entry per row.
    The container is immutable: the matrix is stored read-only and every
    operation that changes data returns a new Dataset.
    """

    __slots__ = ("_data", "_labels", "_columns", "_target_column")

    def __init__(
        self,
        data: NDArray[Any] | Sequence[Sequence[Any]],
        labels: Sequence[Y] | None = None,
        columns: Sequence[str] | None = None,
        target_column: str | None = None,
    ) -> None:
        """Initialize a dataset.

        Args:
            data: 2-D feature matrix.
            labels: Optional labels, one per row.
            columns: Feature column names. Defaults to feature_0..n-1.
            target_column: Name of the label column.

        Raises:
            InvalidDataError: If data is not 2-D or column names don't match.
            LabelCountMismatchError: If label count differs from row count.
        """
        matrix = np.asarray(data)
        if matrix.ndim != 2:
            raise InvalidDataError(f"feature matrix must be 2-D, got {matrix.ndim}-D")

        n_rows, n_cols = matrix.shape
        if columns is None:
            names = _default_columns(n_cols)
        else:
            names = tuple(str(c) for c in columns)
            if len(names) != n_cols:
                raise InvalidDataError(f"{len(names)} column names for {n_cols} columns")

        label_tuple: tuple[Y, ...] | None = None
        if labels is not None:
            label_tuple = tuple(labels)
            if len(label_tuple) != n_rows:
                raise LabelCountMismatchError(n_rows, len(label_tuple))

        self._data = _frozen(matrix)
        self._labels = label_tuple
        self._columns = names
        self._target_column = target_column

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Sequence[Any]],
        labels: Sequence[Y] | None = None,
        columns: Sequence[str] | None = None,
        target_column: str | None = None,
        dtype: DTypeLike = np.float64,
    ) -> Dataset[Y]:
        """Build a dataset from row-major records.

        The schema width is the number of column names when given, else the
        length of the first row.

        Raises:
            RowLengthMismatchError: If a row's length differs from the schema.
            LabelCountMismatchError: If label count differs from row count.
        """
        materialized = [list(row) for row in rows]
        width = len(columns) if columns is not None else (len(materialized[0]) if materialized else 0)
        for index, row in enumerate(materialized):
            if len(row) != width:
                raise RowLengthMismatchError(index, width, len(row))

        try:
            matrix = np.array(materialized, dtype=dtype).reshape(len(materialized), width)
        except (TypeError, ValueError) as e:
            raise InvalidDataError(f"cannot convert rows to {np.dtype(dtype)}: {e}") from e

        logger.debug(f"Built dataset with {matrix.shape[0]} rows and {width} columns")
        return cls(matrix, labels=labels, columns=columns, target_column=target_column)

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        target_column: str | None = None,
        dtype: DTypeLike = np.float64,
    ) -> Dataset[Any]:
        """Build a dataset from a pandas DataFrame.

        Args:
            frame: Source DataFrame.
            target_column: Column to split off as labels, if any.
            dtype: Element type of the feature matrix.

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

        try:
            matrix = features.to_numpy(dtype=dtype)
        except (TypeError, ValueError) as e:
            raise InvalidDataError(f"cannot convert frame to {np.dtype(dtype)}: {e}") from e

        return cls(
            matrix,
            labels=labels,
            columns=[str(c) for c in features.columns],
            target_column=target_column,
        )

    @property
    def data(self) -> NDArray[Any]:
        """Read-only feature matrix."""
        return self._data

    @property
    def labels(self) -> tuple[Y, ...] | None:
        return self._labels

    @property
    def has_labels(self) -> bool:
        return self._labels is not None

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    @property
    def target_column(self) -> str | None:
        return self._target_column

    @property
    def n_rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def n_columns(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.n_rows, self.n_columns

    def column_index(self, column: str | int) -> int:
        """Resolve a column name or position to a position."""
        if isinstance(column, int):
            if not -self.n_columns <= column < self.n_columns:
                raise InvalidDataError(f"column index {column} out of range")
            return column % self.n_columns
        try:
            return self._columns.index(column)
        except ValueError:
            raise InvalidDataError(f"unknown column '{column}'") from None

    def column(self, column: str | int) -> NDArray[Any]:
        """Read-only view of one feature column."""
        return self._data[:, self.column_index(column)]

    def with_data(
        self,
        data: NDArray[Any],
        columns: Sequence[str] | None = None,
    ) -> Dataset[Y]:
        """Return a new dataset with replaced features and the same labels.

        Columns default to the current names when the width is unchanged.
        """
        if columns is None and np.asarray(data).ndim == 2 and np.asarray(data).shape[1] == self.n_columns:
            columns = self._columns
        return Dataset(data, labels=self._labels, columns=columns, target_column=self._target_column)

    def to_frame(self) -> pd.DataFrame:
        """Convert to a DataFrame, with labels as the last column."""
        frame = pd.DataFrame(np.array(self._data), columns=list(self._columns))
        if self._labels is not None:
            frame[self._target_column or DEFAULT_TARGET_NAME] = list(self._labels)
        return frame

    def __len__(self) -> int:
        return self.n_rows

    def __repr__(self) -> str:
        return (
            f"Dataset(rows={self.n_rows}, columns={self.n_columns}, "
            f"dtype={self._data.dtype}, labels={self.has_labels})"
        )
