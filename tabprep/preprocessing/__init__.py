"""Fit/transform estimators.

Each family comes as a pair: a mutable fitter that accumulates statistics and
an immutable transformer returned by the fitter's finish().
"""

from __future__ import annotations

from .base import BaseFitter, CategoryFitter
from .label_encoder import LabelEncoder, LabelEncoderFitter
from .min_max import (
    DEFAULT_FEATURE_RANGE,
    DatasetMinMaxFitter,
    DatasetMinMaxScaler,
    MinMaxFitter,
    MinMaxScaler,
)
from .one_hot import (
    DatasetOneHotEncoder,
    DatasetOneHotFitter,
    OneHotEncoder,
    OneHotEncoderFitter,
)
from .preprocessor import Preprocessor, PreprocessorFitter

__all__ = [
    "BaseFitter",
    "CategoryFitter",
    # Label encoding
    "LabelEncoder",
    "LabelEncoderFitter",
    # One-hot encoding
    "OneHotEncoder",
    "OneHotEncoderFitter",
    "DatasetOneHotEncoder",
    "DatasetOneHotFitter",
    # Min-max scaling
    "DEFAULT_FEATURE_RANGE",
    "MinMaxScaler",
    "MinMaxFitter",
    "DatasetMinMaxScaler",
    "DatasetMinMaxFitter",
    # Combined
    "Preprocessor",
    "PreprocessorFitter",
]
