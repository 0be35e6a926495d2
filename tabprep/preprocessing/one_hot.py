"""One-hot encoding of categorical keys.

OneHotEncoder maps a single categorical key to an indicator vector whose
length is the number of categories observed during fitting. The dataset-level
pair (DatasetOneHotFitter / DatasetOneHotEncoder) encodes every categorical
column of a MixedDataset and produces a numeric Dataset.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeVar

import numpy as np
from numpy.typing import NDArray
from scipy import sparse

from ..core.status import FitStatus
from ..core.values import Categorical, ColumnKind, Numeric
from ..dataset import Dataset, MixedDataset
from ..errors import EmptyFitError, InvalidDataError, UnknownCategoryError
from .base import BaseFitter, CategoryFitter

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class OneHotEncoder(Generic[K]):
    """Fitted one-hot encoder.

    Attributes:
        categories: Categories in indicator order.
    """

    categories: tuple[K, ...]
    _index: Mapping[K, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        categories = tuple(self.categories)
        if not categories:
            raise EmptyFitError(type(self).__name__)
        index = {key: position for position, key in enumerate(categories)}
        if len(index) != len(categories):
            raise InvalidDataError("one-hot categories must be distinct")
        object.__setattr__(self, "categories", categories)
        object.__setattr__(self, "_index", MappingProxyType(index))

    @property
    def status(self) -> FitStatus:
        return FitStatus.FITTED

    def category_count(self) -> int:
        """Length of every indicator vector."""
        return len(self.categories)

    def index_of(self, key: K) -> int:
        """Position of the 1 in the indicator vector for ``key``.

        Raises:
            UnknownCategoryError: If the key was not seen during fitting.
        """
        try:
            return self._index[key]
        except KeyError:
            raise UnknownCategoryError(key) from None

    def transform(self, key: K) -> NDArray[np.float64]:
        """Indicator vector for one key.

        Raises:
            UnknownCategoryError: If the key was not seen during fitting.
        """
        vector = np.zeros(len(self.categories), dtype=np.float64)
        vector[self.index_of(key)] = 1.0
        return vector

    def transform_many(
        self,
        keys: Iterable[K],
        sparse_output: bool = False,
    ) -> NDArray[np.float64] | sparse.csr_matrix:
        """Indicator matrix with one row per key.

        Args:
            keys: Keys to encode.
            sparse_output: Return a scipy CSR matrix instead of a dense array.

        Raises:
            UnknownCategoryError: If any key was not seen during fitting.
        """
        positions = np.fromiter((self.index_of(key) for key in keys), dtype=np.int64)
        n_rows = len(positions)
        shape = (n_rows, len(self.categories))
        if sparse_output:
            data = np.ones(n_rows, dtype=np.float64)
            return sparse.csr_matrix((data, (np.arange(n_rows), positions)), shape=shape)
        matrix = np.zeros(shape, dtype=np.float64)
        matrix[np.arange(n_rows), positions] = 1.0
        return matrix

    def feature_names(self, prefix: str) -> list[str]:
        """Names of the indicator columns, ``{prefix}_{category}``."""
        return [f"{prefix}_{category}" for category in self.categories]


class OneHotEncoderFitter(CategoryFitter[K, OneHotEncoder[K]]):
    """Accumulates distinct categories for a OneHotEncoder."""

    def _build(self) -> OneHotEncoder[K]:
        if not self._codes:
            raise EmptyFitError(type(self).__name__)
        return OneHotEncoder(categories=tuple(self._codes))


@dataclass(frozen=True)
class DatasetOneHotEncoder:
    """Fitted one-hot encoding of every categorical column of a MixedDataset.

    Attributes:
        columns: Column names of the fitted dataset, in order.
        kinds: Column kinds of the fitted dataset.
        encoders: One OneHotEncoder per categorical column.
    """

    columns: tuple[str, ...]
    kinds: Mapping[str, ColumnKind]
    encoders: Mapping[str, OneHotEncoder[str]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "kinds", MappingProxyType(dict(self.kinds)))
        object.__setattr__(self, "encoders", MappingProxyType(dict(self.encoders)))

    @property
    def status(self) -> FitStatus:
        return FitStatus.FITTED

    @property
    def feature_names(self) -> list[str]:
        """Output column names: numeric columns as-is, categorical ones expanded."""
        names: list[str] = []
        for column in self.columns:
            if column in self.encoders:
                names.extend(self.encoders[column].feature_names(column))
            else:
                names.append(column)
        return names

    def _check_layout(self, dataset: MixedDataset[Any]) -> None:
        if dataset.columns != self.columns:
            raise InvalidDataError(
                f"dataset columns {list(dataset.columns)} do not match fitted columns {list(self.columns)}"
            )
        for column in self.columns:
            if dataset.kind_of(column) is not self.kinds[column]:
                raise InvalidDataError(
                    f"column '{column}' is {dataset.kind_of(column).value}, "
                    f"fitted as {self.kinds[column].value}"
                )

    def transform(self, dataset: MixedDataset[Any]) -> Dataset[Any]:
        """Encode a MixedDataset into a numeric Dataset.

        Numeric columns pass through. Each categorical column is replaced in
        place by its indicator block. Missing cells become NaN (a whole NaN
        block for categorical columns).

        Raises:
            InvalidDataError: If the dataset layout differs from the fitted one.
            UnknownCategoryError: If a category was not seen during fitting.
        """
        self._check_layout(dataset)
        blocks: list[NDArray[np.float64]] = []
        for column in self.columns:
            cells = dataset.column(column)
            encoder = self.encoders.get(column)
            if encoder is None:
                values = [cell.value if isinstance(cell, Numeric) else np.nan for cell in cells]
                blocks.append(np.asarray(values, dtype=np.float64).reshape(-1, 1))
                continue
            block = np.full((len(cells), encoder.category_count()), np.nan, dtype=np.float64)
            for row, cell in enumerate(cells):
                if isinstance(cell, Categorical):
                    try:
                        position = encoder.index_of(cell.value)
                    except UnknownCategoryError:
                        raise UnknownCategoryError(cell.value, column=column) from None
                    block[row] = 0.0
                    block[row, position] = 1.0
            blocks.append(block)

        if blocks:
            matrix = np.hstack(blocks)
        else:
            matrix = np.empty((dataset.n_rows, 0), dtype=np.float64)
        return Dataset(
            matrix,
            labels=dataset.labels,
            columns=self.feature_names,
            target_column=dataset.target_column,
        )


class DatasetOneHotFitter(BaseFitter[DatasetOneHotEncoder]):
    """Accumulates categories for every categorical column of a MixedDataset."""

    def __init__(self) -> None:
        super().__init__()
        self._columns: tuple[str, ...] | None = None
        self._kinds: dict[str, ColumnKind] = {}
        self._fitters: dict[str, OneHotEncoderFitter[str]] = {}

    @property
    def fitters(self) -> Mapping[str, OneHotEncoderFitter[str]]:
        """Read-only view of the per-column fitters."""
        return MappingProxyType(self._fitters)

    def validate(self, dataset: MixedDataset[Any]) -> None:
        """Check that fit() would accept a dataset, without observing it.

        Raises:
            InvalidDataError: If the layout differs from earlier datasets.
            AlreadyFittedError: If the fitter already finished.
        """
        self._ensure_open()
        if self._columns is None:
            return
        if dataset.columns != self._columns or dict(dataset.column_kinds) != self._kinds:
            raise InvalidDataError("dataset layout differs from previously observed datasets")

    def fit(self, dataset: MixedDataset[Any]) -> DatasetOneHotFitter:
        """Observe every categorical cell of a dataset; Missing cells are skipped.

        May be called several times with datasets of the same layout. A
        rejected dataset leaves the fitter unchanged.

        Raises:
            InvalidDataError: If the layout differs from earlier datasets.
            AlreadyFittedError: If the fitter already finished.
        """
        self.validate(dataset)
        if self._columns is None:
            self._columns = dataset.columns
            self._kinds = dict(dataset.column_kinds)
            self._fitters = {name: OneHotEncoderFitter() for name in dataset.categorical_columns}

        for name, fitter in self._fitters.items():
            for cell in dataset.column(name):
                if isinstance(cell, Categorical):
                    fitter.observe(cell.value)
        return self

    def _children(self) -> Iterable[OneHotEncoderFitter[str]]:
        return self._fitters.values()

    def _build(self) -> DatasetOneHotEncoder:
        if self._columns is None:
            raise EmptyFitError(type(self).__name__)
        for name, fitter in self._fitters.items():
            if len(fitter) == 0:
                raise EmptyFitError(type(self).__name__, column=name)
        encoders = {name: fitter.snapshot() for name, fitter in self._fitters.items()}
        logger.debug(
            f"One-hot encoding {len(encoders)} categorical columns into "
            f"{sum(e.category_count() for e in encoders.values())} indicator columns"
        )
        return DatasetOneHotEncoder(columns=self._columns, kinds=self._kinds, encoders=encoders)
