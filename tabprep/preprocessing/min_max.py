"""Min-max scaling of numeric columns.

A fitted MinMaxScaler maps the observed [min, max] of a column linearly onto
a target range (default [0, 1]):

    scaled = lo + (value - min) / (max - min) * (hi - lo)

Values outside the fitted [min, max] are not clamped, so data that drifts
beyond the training range shows up outside the target range. Missing values
are skipped while fitting and returned unchanged by transform.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, overload

import numpy as np
from numpy.typing import NDArray

from ..core.ranges import DEFAULT_FEATURE_RANGE, validate_feature_range
from ..core.status import FitStatus
from ..core.values import Categorical, ColumnKind, Missing, MixedValue, Numeric
from ..dataset import Dataset, MixedDataset
from ..errors import (
    ColumnKindConflictError,
    DegenerateRangeError,
    EmptyFitError,
    InvalidDataError,
)
from .base import BaseFitter

if TYPE_CHECKING:
    from typing import Self

logger = logging.getLogger(__name__)

def _numeric_or_none(value: Any) -> float | None:
    """Numeric payload of a value, or None if it is missing."""
    if value is None or isinstance(value, Missing):
        return None
    if isinstance(value, Numeric):
        return value.value
    if isinstance(value, Categorical):
        raise ColumnKindConflictError(f"cannot scale categorical value {value.value!r}")
    if isinstance(value, (bool, np.bool_)):
        raise ColumnKindConflictError(f"cannot scale boolean value {value!r}")
    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
        return None if math.isnan(number) else number
    raise ColumnKindConflictError(f"cannot scale value of type {type(value).__name__}")


def _observable(value: Any) -> float | None:
    """Like _numeric_or_none, but also rejects infinite values."""
    number = _numeric_or_none(value)
    if number is not None and math.isinf(number):
        raise InvalidDataError(f"cannot scale infinite value {number}")
    return number


def _check_range(data_min: float, data_max: float, column: str | None = None) -> None:
    if data_min == data_max:
        raise DegenerateRangeError(data_min, column=column)
    if not math.isfinite(data_max - data_min):
        where = f" in column '{column}'" if column is not None else ""
        raise InvalidDataError(f"range {data_min} to {data_max}{where} overflows a float")


@dataclass(frozen=True)
class MinMaxScaler:
    """Fitted min-max scaler for one column.

    Attributes:
        data_min: Minimum observed during fitting.
        data_max: Maximum observed during fitting.
        feature_range: Target (low, high) range.
    """

    data_min: float
    data_max: float
    feature_range: tuple[float, float] = DEFAULT_FEATURE_RANGE

    def __post_init__(self) -> None:
        object.__setattr__(self, "feature_range", validate_feature_range(self.feature_range))
        object.__setattr__(self, "data_min", float(self.data_min))
        object.__setattr__(self, "data_max", float(self.data_max))
        if self.data_min > self.data_max:
            raise InvalidDataError(f"data_min {self.data_min} exceeds data_max {self.data_max}")
        _check_range(self.data_min, self.data_max)

    @property
    def status(self) -> FitStatus:
        return FitStatus.FITTED

    @property
    def data_range(self) -> float:
        return self.data_max - self.data_min

    @property
    def scale(self) -> float:
        """Multiplier applied to raw values."""
        low, high = self.feature_range
        return (high - low) / self.data_range

    @property
    def offset(self) -> float:
        """Constant added after multiplying by scale."""
        return self.feature_range[0] - self.data_min * self.scale

    def _scale(self, value: float) -> float:
        low, high = self.feature_range
        return low + (value - self.data_min) / self.data_range * (high - low)

    @overload
    def transform(self, value: Numeric) -> Numeric: ...

    @overload
    def transform(self, value: Missing) -> Missing: ...

    @overload
    def transform(self, value: float) -> float: ...

    @overload
    def transform(self, value: None) -> None: ...

    def transform(self, value: Any) -> Any:
        """Scale one value.

        Numeric cells give Numeric cells and plain numbers give floats.
        Missing, None and NaN are returned unchanged.

        Raises:
            ColumnKindConflictError: If the value is categorical.
        """
        number = _numeric_or_none(value)
        if number is None:
            return value
        scaled = self._scale(number)
        if isinstance(value, Numeric):
            return Numeric(scaled)
        return scaled

    def transform_many(self, values: Iterable[Any]) -> NDArray[np.float64]:
        """Scale a sequence of values into a float64 array; missing become NaN."""
        numbers = [_numeric_or_none(value) for value in values]
        array = np.array([np.nan if n is None else n for n in numbers], dtype=np.float64)
        low, high = self.feature_range
        return low + (array - self.data_min) / self.data_range * (high - low)

    def inverse_transform(self, value: float) -> float:
        """Map a scaled value back into the data range."""
        low, high = self.feature_range
        return self.data_min + (float(value) - low) / (high - low) * self.data_range


class MinMaxFitter(BaseFitter[MinMaxScaler]):
    """Tracks the running minimum and maximum of one column."""

    def __init__(self, feature_range: tuple[float, float] = DEFAULT_FEATURE_RANGE) -> None:
        """Initialize the fitter.

        Args:
            feature_range: Target (low, high) range of the scaler.

        Raises:
            InvalidConfigError: If the range is not finite and increasing.
        """
        super().__init__()
        self.feature_range = validate_feature_range(feature_range)
        self._min: float | None = None
        self._max: float | None = None
        self._count = 0

    @property
    def data_min(self) -> float | None:
        return self._min

    @property
    def data_max(self) -> float | None:
        return self._max

    @property
    def count(self) -> int:
        """Number of non-missing values observed."""
        return self._count

    def observe(self, value: float | MixedValue | None) -> None:
        """Update the running min/max. Missing values are skipped.

        Raises:
            ColumnKindConflictError: If the value is categorical.
            InvalidDataError: If the value is infinite.
        """
        self._ensure_open()
        number = _observable(value)
        if number is not None:
            self._update([number])

    def observe_many(self, values: Iterable[float | MixedValue | None]) -> Self:
        """Observe every value; a rejected value leaves the fitter unchanged."""
        self._ensure_open()
        numbers = [_observable(value) for value in values]
        self._update([number for number in numbers if number is not None])
        return self

    def _update(self, numbers: list[float]) -> None:
        if not numbers:
            return
        low, high = min(numbers), max(numbers)
        if self._min is None or low < self._min:
            self._min = low
        if self._max is None or high > self._max:
            self._max = high
        self._count += len(numbers)

    def _build(self) -> MinMaxScaler:
        if self._min is None or self._max is None:
            raise EmptyFitError(type(self).__name__)
        _check_range(self._min, self._max)
        return MinMaxScaler(data_min=self._min, data_max=self._max, feature_range=self.feature_range)


@dataclass(frozen=True)
class DatasetMinMaxScaler:
    """Fitted min-max scaling of every numeric column of a dataset.

    Attributes:
        columns: Column names of the fitted dataset, in order.
        scalers: One MinMaxScaler per numeric column.
    """

    columns: tuple[str, ...]
    scalers: Mapping[str, MinMaxScaler]

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "scalers", MappingProxyType(dict(self.scalers)))

    @property
    def status(self) -> FitStatus:
        return FitStatus.FITTED

    @property
    def data_min(self) -> dict[str, float]:
        return {name: scaler.data_min for name, scaler in self.scalers.items()}

    @property
    def data_max(self) -> dict[str, float]:
        return {name: scaler.data_max for name, scaler in self.scalers.items()}

    def _check_columns(self, columns: tuple[str, ...]) -> None:
        if columns != self.columns:
            raise InvalidDataError(
                f"dataset columns {list(columns)} do not match fitted columns {list(self.columns)}"
            )

    @overload
    def transform(self, dataset: Dataset[Any]) -> Dataset[Any]: ...

    @overload
    def transform(self, dataset: MixedDataset[Any]) -> MixedDataset[Any]: ...

    def transform(self, dataset: Any) -> Any:
        """Scale a dataset, returning a new container of the same type.

        Columns without a fitted scaler (the categorical columns of a
        MixedDataset fit) are left untouched.

        Raises:
            InvalidDataError: If the columns differ from the fitted ones.
        """
        self._check_columns(tuple(dataset.columns))
        if isinstance(dataset, MixedDataset):
            for name in self.scalers:
                if dataset.kind_of(name) is not ColumnKind.NUMERIC:
                    raise InvalidDataError(f"column '{name}' was fitted as numeric")
            scaled_columns = {
                name: [scaler.transform(cell) for cell in dataset.column(name)]
                for name, scaler in self.scalers.items()
            }
            return dataset.with_columns(scaled_columns)

        matrix = np.array(dataset.data, dtype=np.float64)
        for name, scaler in self.scalers.items():
            index = dataset.column_index(name)
            low, high = scaler.feature_range
            matrix[:, index] = low + (matrix[:, index] - scaler.data_min) / scaler.data_range * (high - low)
        return dataset.with_data(matrix)

    def transform_column(self, column: str, values: Iterable[Any]) -> NDArray[np.float64]:
        """Scale raw values of one fitted column."""
        if column not in self.scalers:
            raise InvalidDataError(f"no scaler fitted for column '{column}'")
        return self.scalers[column].transform_many(values)


class DatasetMinMaxFitter(BaseFitter[DatasetMinMaxScaler]):
    """Fits one MinMaxFitter per numeric column of a dataset.

    Every column of a Dataset is numeric. For a MixedDataset only the
    NUMERIC columns are fitted.
    """

    def __init__(self, feature_range: tuple[float, float] = DEFAULT_FEATURE_RANGE) -> None:
        super().__init__()
        self.feature_range = validate_feature_range(feature_range)
        self._columns: tuple[str, ...] | None = None
        self._fitters: dict[str, MinMaxFitter] = {}

    @property
    def fitters(self) -> Mapping[str, MinMaxFitter]:
        """Read-only view of the per-column fitters."""
        return MappingProxyType(self._fitters)

    def _numeric_names(self, dataset: Dataset[Any] | MixedDataset[Any]) -> tuple[str, ...]:
        if self._columns is not None:
            return tuple(self._fitters)
        if isinstance(dataset, MixedDataset):
            return dataset.numeric_columns
        return tuple(dataset.columns)

    def _prepare(self, dataset: Dataset[Any] | MixedDataset[Any]) -> dict[str, list[float]]:
        """Check a whole dataset and collect the numbers fit() would observe."""
        self._ensure_open()
        columns = tuple(dataset.columns)
        if self._columns is not None and columns != self._columns:
            raise InvalidDataError("dataset columns differ from previously observed datasets")

        prepared: dict[str, list[float]] = {}
        for name in self._numeric_names(dataset):
            if isinstance(dataset, MixedDataset):
                if dataset.kind_of(name) is not ColumnKind.NUMERIC:
                    raise InvalidDataError(f"column '{name}' is no longer numeric")
                cells: Iterable[Any] = dataset.column(name)
            else:
                cells = dataset.column(name).tolist()
            try:
                numbers = [_observable(cell) for cell in cells]
            except InvalidDataError as e:
                raise InvalidDataError(f"column '{name}': {e.message}") from e
            prepared[name] = [number for number in numbers if number is not None]
        return prepared

    def validate(self, dataset: Dataset[Any] | MixedDataset[Any]) -> None:
        """Check that fit() would accept a dataset, without observing it.

        Raises:
            InvalidDataError: If the columns or kinds differ from earlier
                datasets, or a value is infinite.
            AlreadyFittedError: If the fitter already finished.
        """
        self._prepare(dataset)

    def fit(self, dataset: Dataset[Any] | MixedDataset[Any]) -> DatasetMinMaxFitter:
        """Observe every numeric cell of a dataset.

        May be called several times with datasets of the same columns. The
        whole dataset is checked first, so a rejected dataset leaves every
        column's statistics unchanged.

        Raises:
            InvalidDataError: If the columns or kinds differ from earlier
                datasets, or a value is infinite.
            AlreadyFittedError: If the fitter already finished.
        """
        prepared = self._prepare(dataset)
        if self._columns is None:
            self._columns = tuple(dataset.columns)
            self._fitters = {name: MinMaxFitter(self.feature_range) for name in prepared}
        for name, numbers in prepared.items():
            self._fitters[name].observe_many(numbers)
        return self

    def _children(self) -> Iterable[MinMaxFitter]:
        return self._fitters.values()

    def _build(self) -> DatasetMinMaxScaler:
        if self._columns is None:
            raise EmptyFitError(type(self).__name__)
        for name, fitter in self._fitters.items():
            if fitter.data_min is None or fitter.data_max is None:
                raise EmptyFitError(type(self).__name__, column=name)
            _check_range(fitter.data_min, fitter.data_max, column=name)
        scalers = {name: fitter.snapshot() for name, fitter in self._fitters.items()}
        logger.debug(f"Min-max scaling {len(scalers)} numeric columns into {self.feature_range}")
        return DatasetMinMaxScaler(columns=self._columns, scalers=scalers)
