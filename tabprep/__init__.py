"""tabprep: preprocessing primitives for tabular ML pipelines.

This library provides typed dataset containers and fit/transform estimators
(label encoding, one-hot encoding, min-max scaling) over numeric and
categorical columns.

Example usage:
    from tabprep import LabelEncoderFitter, MinMaxFitter, MixedDataset, PreprocessorFitter

    encoder = LabelEncoderFitter().observe_many(["cat", "dog", "cat", "bird"]).finish()
    encoder.transform("dog")  # 1

    scaler = MinMaxFitter().observe_many([2.0, 8.0, 5.0]).finish()
    scaler.transform(11.0)  # 1.5, not clamped

    dataset = MixedDataset.from_rows(
        [["5.1", "red"], ["4.9", "blue"], ["NA", "red"]],
        labels=["yes", "no", "yes"],
        columns=["length", "colour"],
    )
    preprocessor, X, y = PreprocessorFitter().fit_transform(dataset)
"""

from __future__ import annotations

# Configuration
from .config import PreprocessingConfig, PreprocessingConfigBuilder

# Core types
from .core import (
    DEFAULT_MISSING_TOKENS,
    MISSING,
    Categorical,
    ColumnKind,
    Fitter,
    FitStatus,
    Missing,
    MixedValue,
    Numeric,
    Transformer,
    ValueKind,
    coerce_value,
)

# Datasets
from .dataset import Dataset, MixedDataset

# Errors
from .errors import (
    AlreadyFittedError,
    ColumnKindConflictError,
    DegenerateRangeError,
    EmptyFitError,
    ErrorKind,
    InvalidCodeError,
    InvalidConfigError,
    InvalidDataError,
    LabelCountMismatchError,
    PrepError,
    RowLengthMismatchError,
    TargetNotFoundError,
    UnknownCategoryError,
)

# Estimators
from .preprocessing import (
    DatasetMinMaxFitter,
    DatasetMinMaxScaler,
    DatasetOneHotEncoder,
    DatasetOneHotFitter,
    LabelEncoder,
    LabelEncoderFitter,
    MinMaxFitter,
    MinMaxScaler,
    OneHotEncoder,
    OneHotEncoderFitter,
    Preprocessor,
    PreprocessorFitter,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Configuration
    "PreprocessingConfig",
    "PreprocessingConfigBuilder",
    # Core types
    "ValueKind",
    "ColumnKind",
    "Numeric",
    "Categorical",
    "Missing",
    "MISSING",
    "MixedValue",
    "DEFAULT_MISSING_TOKENS",
    "coerce_value",
    "FitStatus",
    "Fitter",
    "Transformer",
    # Datasets
    "Dataset",
    "MixedDataset",
    # Estimators
    "LabelEncoder",
    "LabelEncoderFitter",
    "OneHotEncoder",
    "OneHotEncoderFitter",
    "DatasetOneHotEncoder",
    "DatasetOneHotFitter",
    "MinMaxScaler",
    "MinMaxFitter",
    "DatasetMinMaxScaler",
    "DatasetMinMaxFitter",
    "Preprocessor",
    "PreprocessorFitter",
    # Errors
    "ErrorKind",
    "PrepError",
    "EmptyFitError",
    "UnknownCategoryError",
    "InvalidCodeError",
    "DegenerateRangeError",
    "RowLengthMismatchError",
    "LabelCountMismatchError",
    "ColumnKindConflictError",
    "AlreadyFittedError",
    "InvalidConfigError",
    "InvalidDataError",
    "TargetNotFoundError",
]
