"""Core types and protocols for tabprep.

This module contains the mixed cell values, the fit lifecycle status and the
fitter/transformer protocols used throughout the library.
"""

from __future__ import annotations

from .protocols import Fitter, Transformer
from .ranges import DEFAULT_FEATURE_RANGE, validate_feature_range
from .status import FitStatus
from .values import (
    DEFAULT_MISSING_TOKENS,
    MISSING,
    Categorical,
    ColumnKind,
    Missing,
    MixedValue,
    Numeric,
    ValueKind,
    coerce_value,
    infer_kind,
    is_missing,
)

__all__ = [
    # Values
    "ValueKind",
    "ColumnKind",
    "Numeric",
    "Categorical",
    "Missing",
    "MISSING",
    "MixedValue",
    "DEFAULT_MISSING_TOKENS",
    "coerce_value",
    "infer_kind",
    "is_missing",
    # Ranges
    "DEFAULT_FEATURE_RANGE",
    "validate_feature_range",
    # Lifecycle
    "FitStatus",
    "Fitter",
    "Transformer",
]
