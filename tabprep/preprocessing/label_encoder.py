"""Label encoding of categorical keys into dense integer codes.

Codes are assigned in first-seen order: the first distinct key observed gets
0, the next 1, and so on. Fitting twice on the same ordered input gives the
same mapping; fitting on a reordered input may not.

Example:
    fitter = LabelEncoderFitter()
    fitter.observe_many(["cat", "dog", "cat", "bird"])
    encoder = fitter.finish()
    encoder.transform("dog")  # 1
    encoder.inverse_transform(2)  # "bird"
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeVar

import numpy as np
from numpy.typing import NDArray

from ..core.status import FitStatus
from ..errors import EmptyFitError, InvalidCodeError, InvalidDataError, UnknownCategoryError
from .base import CategoryFitter

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class LabelEncoder(Generic[K]):
    """Fitted label encoder.

    Attributes:
        classes: Keys in code order; the key at position i has code i.
    """

    classes: tuple[K, ...]
    _index: Mapping[K, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        classes = tuple(self.classes)
        if not classes:
            raise EmptyFitError(type(self).__name__)
        index = {key: code for code, key in enumerate(classes)}
        if len(index) != len(classes):
            raise InvalidDataError("label encoder classes must be distinct")
        object.__setattr__(self, "classes", classes)
        object.__setattr__(self, "_index", MappingProxyType(index))

    @property
    def status(self) -> FitStatus:
        return FitStatus.FITTED

    @property
    def mapping(self) -> Mapping[K, int]:
        """Read-only key to code mapping."""
        return self._index

    def transform(self, key: K) -> int:
        """Return the code for a key seen during fitting.

        Raises:
            UnknownCategoryError: If the key was not seen during fitting.
        """
        try:
            return self._index[key]
        except KeyError:
            raise UnknownCategoryError(key) from None

    def transform_many(self, keys: Iterable[K]) -> NDArray[np.int64]:
        """Encode a sequence of keys into an int64 array."""
        return np.fromiter((self.transform(key) for key in keys), dtype=np.int64)

    def inverse_transform(self, code: Any) -> K:
        """Return the key for a code.

        Integral floats are accepted, since codes often travel through
        float matrices.

        Raises:
            InvalidCodeError: If the code is not an integer in [0, n).
        """
        if isinstance(code, (bool, np.bool_)):
            raise InvalidCodeError(code, len(self.classes))
        if isinstance(code, (float, np.floating)):
            if not float(code).is_integer():
                raise InvalidCodeError(code, len(self.classes))
            position = int(code)
        elif isinstance(code, (int, np.integer)):
            position = int(code)
        else:
            raise InvalidCodeError(code, len(self.classes))
        if not 0 <= position < len(self.classes):
            raise InvalidCodeError(code, len(self.classes))
        return self.classes[position]

    def inverse_transform_many(self, codes: Iterable[Any]) -> list[K]:
        return [self.inverse_transform(code) for code in codes]

    def __len__(self) -> int:
        return len(self.classes)

    def __contains__(self, key: object) -> bool:
        return key in self._index


class LabelEncoderFitter(CategoryFitter[K, LabelEncoder[K]]):
    """Accumulates distinct keys for a LabelEncoder."""

    def _build(self) -> LabelEncoder[K]:
        if not self._codes:
            raise EmptyFitError(type(self).__name__)
        return LabelEncoder(classes=tuple(self._codes))
