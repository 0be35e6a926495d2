"""Shared fitter machinery."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..core.status import FitStatus
from ..errors import AlreadyFittedError

if TYPE_CHECKING:
    from typing import Self

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


class BaseFitter(Generic[T]):
    """Owns the fit status of a fitter and guards finish().

    Subclasses implement _build(), which turns the accumulated statistics
    into a transformer. If _build() raises, the status stays UNFITTED and the
    statistics are untouched, so the caller may observe more data and retry.

    Composite fitters build their parts with snapshot() and list them in
    _children(), so the parts move to FITTED with the composite.
    """

    def __init__(self) -> None:
        self._status = FitStatus.UNFITTED

    @property
    def status(self) -> FitStatus:
        """Current lifecycle state."""
        return self._status

    @property
    def is_fitted(self) -> bool:
        return self._status.is_fitted

    def _ensure_open(self) -> None:
        if self._status.is_fitted:
            raise AlreadyFittedError(type(self).__name__)
        for child in self._children():
            child._ensure_open()

    def _build(self) -> T:
        raise NotImplementedError

    def _children(self) -> Iterable[BaseFitter[Any]]:
        """Sub-fitters whose statistics this fitter's transformer is built from."""
        return ()

    def _commit(self) -> None:
        for child in self._children():
            child._commit()
        self._status = self._status.transition(type(self).__name__)

    def snapshot(self) -> T:
        """Build a transformer from the statistics so far without finishing.

        The fitter stays UNFITTED and keeps accepting observations.

        Raises:
            AlreadyFittedError: If this fitter already finished.
            EmptyFitError: If nothing usable was observed.
        """
        self._ensure_open()
        return self._build()

    def finish(self) -> T:
        """Freeze the accumulated statistics into a transformer.

        The fitter and its sub-fitters move to FITTED together, and only once
        every part has been built.

        Raises:
            AlreadyFittedError: If this fitter already finished.
            EmptyFitError: If nothing usable was observed.
        """
        transformer = self.snapshot()
        self._commit()
        logger.debug(f"{type(self).__name__} finished: {transformer!r}")
        return transformer


class CategoryFitter(BaseFitter[T], Generic[K, T]):
    """Fitter that records distinct keys in first-seen order."""

    def __init__(self) -> None:
        super().__init__()
        self._codes: dict[K, int] = {}

    @property
    def categories(self) -> tuple[K, ...]:
        """Keys observed so far, in first-seen order."""
        return tuple(self._codes)

    def observe(self, key: K) -> None:
        """Record a key. Repeated keys keep their original position."""
        self._ensure_open()
        if key not in self._codes:
            self._codes[key] = len(self._codes)

    def observe_many(self, keys: Iterable[K]) -> Self:
        """Record every key of an iterable; returns self for chaining."""
        for key in keys:
            self.observe(key)
        return self

    def __len__(self) -> int:
        return len(self._codes)
