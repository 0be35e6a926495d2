"""Mixed cell values for heterogeneous tabular data.

A cell in a MixedDataset is one of three variants:

- Numeric: a float64 measurement.
- Categorical: a text token.
- Missing: no value. Any column may hold Missing cells, whatever its kind.

Raw fields coming from an ingestion source are turned into variants by
coerce_value(), which is the single place where the variant tag is decided.
"""

from __future__ import annotations

import math
from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

import numpy as np

from ..errors import ColumnKindConflictError


class ValueKind(Enum):
    """Variant tag of a single cell."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    MISSING = "missing"


class ColumnKind(Enum):
    """Declared kind of a column, fixed once at construction."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


DEFAULT_MISSING_TOKENS: frozenset[str] = frozenset({"", "NA", "N/A", "NaN", "nan", "null", "None"})


@dataclass(frozen=True)
class Numeric:
    """Numeric cell."""

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    @property
    def kind(self) -> ValueKind:
        return ValueKind.NUMERIC


@dataclass(frozen=True)
class Categorical:
    """Categorical cell holding a text token."""

    value: str

    @property
    def kind(self) -> ValueKind:
        return ValueKind.CATEGORICAL


@dataclass(frozen=True)
class Missing:
    """Missing cell. Carries no payload; all instances are equal."""

    @property
    def kind(self) -> ValueKind:
        return ValueKind.MISSING


MISSING = Missing()

MixedValue = Union[Numeric, Categorical, Missing]


def is_missing(raw: Any, missing_tokens: Collection[str] = DEFAULT_MISSING_TOKENS) -> bool:
    """Whether a raw field or cell should be treated as missing."""
    if raw is None or isinstance(raw, Missing):
        return True
    if isinstance(raw, str):
        return raw.strip() in missing_tokens
    if isinstance(raw, (float, np.floating)):
        return math.isnan(raw)
    return False


def infer_kind(value: MixedValue) -> ColumnKind | None:
    """Column kind implied by a cell, or None for a Missing cell."""
    if isinstance(value, Numeric):
        return ColumnKind.NUMERIC
    if isinstance(value, Categorical):
        return ColumnKind.CATEGORICAL
    return None


def _parse_float(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None


def coerce_value(
    raw: Any,
    kind: ColumnKind | None = None,
    missing_tokens: Collection[str] = DEFAULT_MISSING_TOKENS,
) -> MixedValue:
    """Convert a raw field into a MixedValue.

    Args:
        raw: Raw field (text, number, None or an existing MixedValue).
        kind: Declared column kind, or None while the kind is undecided.
        missing_tokens: Text tokens treated as missing.

    Returns:
        The corresponding Numeric, Categorical or MISSING value.

    Raises:
        ColumnKindConflictError: If the field cannot be a value of ``kind``.
    """
    if is_missing(raw, missing_tokens):
        return MISSING

    if isinstance(raw, (Numeric, Categorical)):
        implied = infer_kind(raw)
        if kind is not None and implied is not kind:
            raise ColumnKindConflictError(
                f"{implied.value} value {raw.value!r} in a {kind.value} column"  # type: ignore[union-attr]
            )
        return raw

    # bool is an int subclass but is not a measurement
    if isinstance(raw, (bool, np.bool_)):
        raise ColumnKindConflictError(f"unsupported boolean value {raw!r}")

    if isinstance(raw, (int, float, np.integer, np.floating)):
        if kind is ColumnKind.CATEGORICAL:
            raise ColumnKindConflictError(f"numeric value {raw!r} in a categorical column")
        return Numeric(float(raw))

    if isinstance(raw, str):
        text = raw.strip()
        if kind is ColumnKind.CATEGORICAL:
            return Categorical(text)
        number = _parse_float(text)
        if number is not None:
            return Numeric(number)
        if kind is ColumnKind.NUMERIC:
            raise ColumnKindConflictError(f"cannot parse {raw!r} as a number")
        return Categorical(text)

    raise ColumnKindConflictError(f"unsupported value type {type(raw).__name__}")
