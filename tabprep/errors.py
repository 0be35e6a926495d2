"""Exception hierarchy for tabprep."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Kind of failure carried by every tabprep exception."""

    EMPTY_FIT = "empty_fit"
    UNKNOWN_CATEGORY = "unknown_category"
    INVALID_CODE = "invalid_code"
    DEGENERATE_RANGE = "degenerate_range"
    ROW_LENGTH_MISMATCH = "row_length_mismatch"
    LABEL_COUNT_MISMATCH = "label_count_mismatch"
    COLUMN_KIND_CONFLICT = "column_kind_conflict"
    ALREADY_FITTED = "already_fitted"
    INVALID_CONFIG = "invalid_config"
    INVALID_DATA = "invalid_data"
    TARGET_NOT_FOUND = "target_not_found"


class PrepError(Exception):
    """Base exception for tabprep.

    Attributes:
        kind: The ErrorKind describing the failure.
        message: Human-readable description.
    """

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(message)


class EmptyFitError(PrepError):
    """finish() was called on a fitter that observed nothing."""

    def __init__(self, estimator: str, column: str | None = None) -> None:
        self.estimator = estimator
        self.column = column
        where = f" for column '{column}'" if column is not None else ""
        super().__init__(
            ErrorKind.EMPTY_FIT,
            f"{estimator} cannot finish{where}: no values were observed",
        )


class UnknownCategoryError(PrepError):
    """Transform-time key was not seen during fitting."""

    def __init__(self, key: Any, column: str | None = None) -> None:
        self.key = key
        self.column = column
        where = f" in column '{column}'" if column is not None else ""
        super().__init__(
            ErrorKind.UNKNOWN_CATEGORY,
            f"Unknown category {key!r}{where}",
        )


class InvalidCodeError(PrepError):
    """Inverse-transform code is outside the fitted code range."""

    def __init__(self, code: Any, size: int) -> None:
        self.code = code
        self.size = size
        super().__init__(
            ErrorKind.INVALID_CODE,
            f"Invalid code {code!r}: expected an integer in [0, {size - 1}]",
        )


class DegenerateRangeError(PrepError):
    """Observed minimum equals maximum, so scaling would divide by zero."""

    def __init__(self, value: float, column: str | None = None) -> None:
        self.value = value
        self.column = column
        where = f" for column '{column}'" if column is not None else ""
        super().__init__(
            ErrorKind.DEGENERATE_RANGE,
            f"Degenerate range{where}: min == max == {value}",
        )


class RowLengthMismatchError(PrepError):
    """A row's column count differs from the declared schema.

    Column-major containers report the offending column instead of a row.
    """

    def __init__(
        self,
        row: int | None,
        expected: int,
        actual: int,
        column: str | None = None,
    ) -> None:
        self.row = row
        self.expected = expected
        self.actual = actual
        self.column = column
        if column is not None:
            message = f"Column '{column}' has {actual} rows, expected {expected}"
        else:
            message = f"Row {row} has {actual} columns, expected {expected}"
        super().__init__(ErrorKind.ROW_LENGTH_MISMATCH, message)


class LabelCountMismatchError(PrepError):
    """Label count differs from row count."""

    def __init__(self, rows: int, labels: int) -> None:
        self.rows = rows
        self.labels = labels
        super().__init__(
            ErrorKind.LABEL_COUNT_MISMATCH,
            f"Got {labels} labels for {rows} rows",
        )


class ColumnKindConflictError(PrepError):
    """A value does not match the kind recorded for its column."""

    def __init__(self, message: str, column: str | None = None, row: int | None = None) -> None:
        self.column = column
        self.row = row
        prefix = ""
        if column is not None:
            prefix = f"Column '{column}'"
            if row is not None:
                prefix += f", row {row}"
            prefix += ": "
        super().__init__(ErrorKind.COLUMN_KIND_CONFLICT, f"{prefix}{message}")


class AlreadyFittedError(PrepError):
    """Fitter was used after it already finished."""

    def __init__(self, estimator: str) -> None:
        self.estimator = estimator
        super().__init__(
            ErrorKind.ALREADY_FITTED,
            f"{estimator} has already been fitted; create a new fitter to re-fit",
        )


class InvalidConfigError(PrepError):
    """Invalid configuration provided."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.INVALID_CONFIG, f"Invalid configuration: {message}")


class InvalidDataError(PrepError):
    """Data validation failed."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.INVALID_DATA, f"Invalid data: {message}")


class TargetNotFoundError(PrepError):
    """Target column not found in data."""

    def __init__(self, column: str, available: list[str]) -> None:
        self.column = column
        self.available = available
        super().__init__(
            ErrorKind.TARGET_NOT_FOUND,
            f"Target column '{column}' not found. Available columns: {available}",
        )
