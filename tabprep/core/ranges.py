"""Target ranges for scaling."""

from __future__ import annotations

import math
from typing import Any

from ..errors import InvalidConfigError

DEFAULT_FEATURE_RANGE: tuple[float, float] = (0.0, 1.0)


def validate_feature_range(feature_range: Any) -> tuple[float, float]:
    """Check that a target range is a finite, strictly increasing pair.

    The width ``high - low`` must be finite as well.

    Raises:
        InvalidConfigError: If the range is invalid.
    """
    try:
        low, high = (float(bound) for bound in feature_range)
    except (TypeError, ValueError) as e:
        raise InvalidConfigError(f"feature_range must be a pair of numbers, got {feature_range!r}") from e
    if not (math.isfinite(low) and math.isfinite(high)):
        raise InvalidConfigError(f"feature_range must be finite, got {feature_range!r}")
    if low >= high:
        raise InvalidConfigError(f"feature_range minimum must be below maximum, got {feature_range!r}")
    if not math.isfinite(high - low):
        raise InvalidConfigError(f"feature_range width overflows, got {feature_range!r}")
    return low, high
