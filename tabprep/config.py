"""Configuration dataclasses for tabprep."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import pandas as pd

from .core.ranges import DEFAULT_FEATURE_RANGE, validate_feature_range
from .core.values import DEFAULT_MISSING_TOKENS, ColumnKind
from .dataset import MixedDataset
from .errors import InvalidConfigError

if TYPE_CHECKING:
    from typing import Self


@dataclass
class PreprocessingConfig:
    """Configuration for ingestion and preprocessing.

    Attributes:
        feature_range: Target (low, high) range for min-max scaling.
        missing_tokens: Text tokens read as missing values.
        schema: Explicit column kinds; overrides inference for named columns.
        target_column: Name of the label column in a DataFrame, if any.
        scale_numeric: Whether numeric columns are min-max scaled.
        encode_labels: Whether labels are label-encoded into integer codes.
    """

    feature_range: tuple[float, float] = DEFAULT_FEATURE_RANGE
    missing_tokens: frozenset[str] = DEFAULT_MISSING_TOKENS
    schema: dict[str, ColumnKind] | None = None
    target_column: str | None = None
    scale_numeric: bool = True
    encode_labels: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        try:
            self.feature_range = validate_feature_range(self.feature_range)
        except InvalidConfigError as e:
            raise ValueError(e.message) from e
        self.missing_tokens = frozenset(self.missing_tokens)
        if self.schema is not None:
            self.schema = {str(name): ColumnKind(kind) for name, kind in self.schema.items()}

    @classmethod
    def builder(cls) -> PreprocessingConfigBuilder:
        """Create a builder for PreprocessingConfig."""
        return PreprocessingConfigBuilder()

    def load_frame(self, frame: pd.DataFrame) -> MixedDataset[Any]:
        """Build a MixedDataset from a DataFrame using this configuration."""
        return MixedDataset.from_frame(
            frame,
            target_column=self.target_column,
            schema=self.schema,
            missing_tokens=self.missing_tokens,
        )


class PreprocessingConfigBuilder:
    """Builder for PreprocessingConfig with fluent interface."""

    def __init__(self) -> None:
        self._feature_range: tuple[float, float] = DEFAULT_FEATURE_RANGE
        self._missing_tokens: frozenset[str] = DEFAULT_MISSING_TOKENS
        self._schema: dict[str, ColumnKind] | None = None
        self._target_column: str | None = None
        self._scale_numeric: bool = True
        self._encode_labels: bool = True

    def feature_range(self, low: float, high: float) -> Self:
        """Set the min-max target range."""
        self._feature_range = (low, high)
        return self

    def missing_tokens(self, value: Collection[str]) -> Self:
        """Replace the set of tokens read as missing."""
        self._missing_tokens = frozenset(value)
        return self

    def schema(self, value: Mapping[str, ColumnKind]) -> Self:
        """Set explicit column kinds."""
        self._schema = dict(value)
        return self

    def column_kind(self, column: str, kind: ColumnKind) -> Self:
        """Declare the kind of a single column."""
        if self._schema is None:
            self._schema = {}
        self._schema[column] = kind
        return self

    def target_column(self, value: str) -> Self:
        """Set the target column name."""
        self._target_column = value
        return self

    def scale_numeric(self, value: bool) -> Self:
        """Enable or disable min-max scaling of numeric columns."""
        self._scale_numeric = value
        return self

    def encode_labels(self, value: bool) -> Self:
        """Enable or disable label encoding of the target."""
        self._encode_labels = value
        return self

    def build(self) -> PreprocessingConfig:
        """Build the PreprocessingConfig."""
        return PreprocessingConfig(
            feature_range=self._feature_range,
            missing_tokens=self._missing_tokens,
            schema=self._schema,
            target_column=self._target_column,
            scale_numeric=self._scale_numeric,
            encode_labels=self._encode_labels,
        )
