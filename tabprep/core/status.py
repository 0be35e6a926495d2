"""Fit lifecycle status."""

from __future__ import annotations

from enum import Enum

from ..errors import AlreadyFittedError


class FitStatus(Enum):
    """Lifecycle state of an estimator.

    UNFITTED is the initial state and FITTED is terminal. The only legal move
    is UNFITTED -> FITTED, made once by a fitter's finish() on success.
    """

    UNFITTED = "unfitted"
    FITTED = "fitted"

    @property
    def is_fitted(self) -> bool:
        return self is FitStatus.FITTED

    def transition(self, estimator: str = "estimator") -> FitStatus:
        """Return the next state.

        Raises:
            AlreadyFittedError: If the status is already FITTED.
        """
        if self is FitStatus.FITTED:
            raise AlreadyFittedError(estimator)
        return FitStatus.FITTED
