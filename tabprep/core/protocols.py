"""Protocols shared by all estimator families.

Every family is split into two types. A Fitter accumulates statistics and
has no transform operation; its finish() freezes the statistics into a
Transformer, which has no way to observe more data. Calling transform before
fitting is therefore impossible rather than checked at runtime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from .status import FitStatus

T_co = TypeVar("T_co", covariant=True)


class Fitter(Protocol[T_co]):
    """Protocol for mutable statistics accumulators."""

    @property
    def status(self) -> FitStatus:
        """Current lifecycle state of the fitter."""
        ...

    def finish(self) -> T_co:
        """Freeze the accumulated statistics into a transformer.

        Returns:
            The fitted transformer.

        Raises:
            EmptyFitError: If nothing usable was observed.
            AlreadyFittedError: If the fitter already finished.
        """
        ...


class Transformer(Protocol):
    """Protocol for immutable fitted estimators.

    Implementations are frozen and may be shared between threads.
    """

    @property
    def status(self) -> FitStatus:
        """Always FitStatus.FITTED."""
        ...
