"""Dataset containers.

Dataset holds a homogeneous feature matrix; MixedDataset holds columns of
MixedValue cells whose kinds may differ per column.
"""

from __future__ import annotations

from .dataset import Dataset
from .mixed import MixedDataset

__all__ = [
    "Dataset",
    "MixedDataset",
]
