"""Data preprocessing for ML training.

Turns a MixedDataset into model-ready arrays: numeric columns are min-max
scaled, categorical columns are one-hot encoded and labels are label
encoded.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from ..config import PreprocessingConfig
from ..core.status import FitStatus
from ..dataset import Dataset, MixedDataset
from ..errors import EmptyFitError, InvalidDataError
from .base import BaseFitter
from .label_encoder import LabelEncoder, LabelEncoderFitter
from .min_max import DatasetMinMaxFitter, DatasetMinMaxScaler
from .one_hot import DatasetOneHotEncoder, DatasetOneHotFitter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preprocessor:
    """Fitted preprocessing bundle.

    Holds the frozen transformers produced by PreprocessorFitter and applies
    them in order: scaling, then one-hot encoding, then label encoding.

    Attributes:
        feature_names: Original feature names before transformation.
        scaler: Min-max scaling of numeric columns (None if disabled).
        encoder: One-hot encoding of categorical columns.
        label_encoder: Label encoding of targets (None if not fitted).
    """

    feature_names: tuple[str, ...]
    scaler: DatasetMinMaxScaler | None
    encoder: DatasetOneHotEncoder
    label_encoder: LabelEncoder[Any] | None = None

    @property
    def status(self) -> FitStatus:
        return FitStatus.FITTED

    @property
    def transformed_feature_names(self) -> list[str]:
        """Feature names after transformation (includes one-hot encoded names)."""
        return self.encoder.feature_names

    @property
    def class_labels(self) -> list[Any] | None:
        """Labels in code order, for classification targets."""
        if self.label_encoder is None:
            return None
        return list(self.label_encoder.classes)

    def transform_dataset(self, dataset: MixedDataset[Any]) -> Dataset[Any]:
        """Transform features into a numeric Dataset that keeps the raw labels.

        Raises:
            InvalidDataError: If the columns differ from the fitted ones.
            UnknownCategoryError: If a category was not seen during fitting.
        """
        if dataset.columns != self.feature_names:
            raise InvalidDataError(
                f"dataset columns {list(dataset.columns)} do not match fitted columns {list(self.feature_names)}"
            )
        scaled = self.scaler.transform(dataset) if self.scaler is not None else dataset
        return self.encoder.transform(scaled)

    def transform(
        self,
        dataset: MixedDataset[Any],
    ) -> tuple[NDArray[np.float64], NDArray[np.int64] | None]:
        """Transform features and, when present, labels.

        Returns:
            Tuple of (transformed_X, transformed_y). transformed_y is None if
            the dataset has no labels or labels were not encoded.
        """
        X = np.array(self.transform_dataset(dataset).data, dtype=np.float64)
        y: NDArray[np.int64] | None = None
        if dataset.labels is not None and self.label_encoder is not None:
            y = self.label_encoder.transform_many(dataset.labels)
        return X, y

    def inverse_transform_labels(self, codes: Iterable[Any]) -> list[Any]:
        """Map label codes back to the original labels.

        Raises:
            InvalidDataError: If no label encoder was fitted.
            InvalidCodeError: If a code is out of range.
        """
        if self.label_encoder is None:
            raise InvalidDataError("no label encoder was fitted")
        return self.label_encoder.inverse_transform_many(codes)


class PreprocessorFitter(BaseFitter[Preprocessor]):
    """Fits scaling, one-hot and label encoding over a MixedDataset."""

    def __init__(self, config: PreprocessingConfig | None = None) -> None:
        """Initialize the fitter.

        Args:
            config: Preprocessing configuration; defaults are used if None.
        """
        super().__init__()
        self.config = config or PreprocessingConfig()
        self._feature_names: tuple[str, ...] | None = None
        self._scaler_fitter = (
            DatasetMinMaxFitter(self.config.feature_range) if self.config.scale_numeric else None
        )
        self._encoder_fitter = DatasetOneHotFitter()
        self._label_fitter: LabelEncoderFitter[Hashable] | None = None

    def validate(self, dataset: MixedDataset[Any]) -> None:
        """Check that fit() would accept a dataset, without observing it.

        Raises:
            InvalidDataError: If the layout differs from earlier datasets, a
                numeric value is infinite or a label is unhashable.
            AlreadyFittedError: If the fitter already finished.
        """
        self._ensure_open()
        if self._scaler_fitter is not None:
            self._scaler_fitter.validate(dataset)
        self._encoder_fitter.validate(dataset)
        if self.config.encode_labels and dataset.labels is not None:
            for label in dataset.labels:
                if not isinstance(label, Hashable):
                    raise InvalidDataError(f"label {label!r} is not hashable")

    def fit(self, dataset: MixedDataset[Any]) -> PreprocessorFitter:
        """Observe a dataset.

        Every part checks the dataset before any part observes it, so a
        rejected dataset leaves the fitter unchanged.

        Returns:
            Self for method chaining.
        """
        self.validate(dataset)
        if self._feature_names is None:
            self._feature_names = dataset.columns
        if self._scaler_fitter is not None:
            self._scaler_fitter.fit(dataset)
        self._encoder_fitter.fit(dataset)
        if self.config.encode_labels and dataset.labels is not None:
            if self._label_fitter is None:
                self._label_fitter = LabelEncoderFitter()
            self._label_fitter.observe_many(dataset.labels)
        return self

    def _children(self) -> Iterable[BaseFitter[Any]]:
        parts: list[BaseFitter[Any]] = [self._encoder_fitter]
        if self._scaler_fitter is not None:
            parts.append(self._scaler_fitter)
        if self._label_fitter is not None:
            parts.append(self._label_fitter)
        return parts

    def _build(self) -> Preprocessor:
        if self._feature_names is None:
            raise EmptyFitError(type(self).__name__)
        scaler = self._scaler_fitter.snapshot() if self._scaler_fitter is not None else None
        encoder = self._encoder_fitter.snapshot()
        label_encoder = self._label_fitter.snapshot() if self._label_fitter is not None else None
        logger.debug(
            f"Preprocessor fitted on {len(self._feature_names)} columns; "
            f"{len(encoder.feature_names)} output features"
        )
        return Preprocessor(
            feature_names=self._feature_names,
            scaler=scaler,
            encoder=encoder,
            label_encoder=label_encoder,
        )

    def fit_transform(
        self,
        dataset: MixedDataset[Any],
    ) -> tuple[Preprocessor, NDArray[np.float64], NDArray[np.int64] | None]:
        """Fit, finish and transform in one step.

        Returns:
            Tuple of (preprocessor, transformed_X, transformed_y).
        """
        preprocessor = self.fit(dataset).finish()
        X, y = preprocessor.transform(dataset)
        return preprocessor, X, y
