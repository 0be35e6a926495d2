"""Shared test fixtures and utilities for tabprep tests."""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
import pytest

from tabprep import ColumnKind, Dataset, MixedDataset, PreprocessingConfig

# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def iris_rows() -> list[list[float]]:
    """First rows of each Iris species (Id, sepal/petal length and width)."""
    return [
        [1.0, 5.1, 3.5, 1.4, 0.2],
        [2.0, 4.9, 3.0, 1.4, 0.2],
        [51.0, 7.0, 3.2, 4.7, 1.4],
        [52.0, 6.4, 3.2, 4.5, 1.5],
        [101.0, 6.3, 3.3, 6.0, 2.5],
        [150.0, 5.9, 3.0, 5.1, 1.8],
    ]


@pytest.fixture
def iris_labels() -> list[str]:
    return [
        "Iris-setosa",
        "Iris-setosa",
        "Iris-versicolor",
        "Iris-versicolor",
        "Iris-virginica",
        "Iris-virginica",
    ]


@pytest.fixture
def iris_columns() -> list[str]:
    return ["Id", "SepalLengthCm", "SepalWidthCm", "PetalLengthCm", "PetalWidthCm"]


@pytest.fixture
def iris_dataset(iris_rows, iris_labels, iris_columns) -> Dataset[str]:
    """Small numeric dataset with string labels."""
    return Dataset.from_rows(
        iris_rows,
        labels=iris_labels,
        columns=iris_columns,
        target_column="Species",
    )


@pytest.fixture
def pokemon_rows() -> list[list[str]]:
    """Raw text rows mixing numeric stats and categorical typings."""
    return [
        ["1", "Bulbasaur", "Grass", "Poison", "45", "49"],
        ["4", "Charmander", "Fire", "", "39", "52"],
        ["7", "Squirtle", "Water", "", "44", "48"],
        ["6", "Charizard", "Fire", "Flying", "78", "84"],
        ["144", "Articuno", "Ice", "Flying", "90", "85"],
    ]


@pytest.fixture
def pokemon_columns() -> list[str]:
    return ["#", "Name", "Type 1", "Type 2", "HP", "Attack"]


@pytest.fixture
def pokemon_labels() -> list[str]:
    return ["False", "False", "False", "False", "True"]


@pytest.fixture
def pokemon_dataset(pokemon_rows, pokemon_columns, pokemon_labels) -> MixedDataset[str]:
    """Mixed dataset: numeric '#', 'HP', 'Attack' and categorical names and types."""
    return MixedDataset.from_rows(
        pokemon_rows,
        labels=pokemon_labels,
        columns=pokemon_columns,
        target_column="Legendary",
    )


@pytest.fixture
def mixed_types_frame() -> pd.DataFrame:
    """DataFrame with numeric and categorical features and a target column."""
    np.random.seed(42)
    n_samples = 60

    data: dict[str, Any] = {
        "numeric_1": np.random.randn(n_samples),
        "numeric_2": np.random.uniform(0, 100, n_samples),
        "category_1": np.random.choice(["A", "B", "C"], n_samples),
        "category_2": np.random.choice(["X", "Y"], n_samples),
        "target": np.random.choice(["yes", "no"], n_samples),
    }

    return pd.DataFrame(data)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def default_config() -> PreprocessingConfig:
    return PreprocessingConfig()


@pytest.fixture
def pokemon_config() -> PreprocessingConfig:
    """Config that declares the pokedex number as categorical."""
    return (
        PreprocessingConfig.builder()
        .column_kind("#", ColumnKind.CATEGORICAL)
        .target_column("Legendary")
        .build()
    )


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that chain several estimators end to end"
    )
