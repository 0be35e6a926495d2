"""Tests for LabelEncoder and LabelEncoderFitter."""

from __future__ import annotations

import numpy as np
import pytest

from tabprep import (
    EmptyFitError,
    ErrorKind,
    InvalidCodeError,
    InvalidDataError,
    LabelEncoder,
    LabelEncoderFitter,
    UnknownCategoryError,
)


@pytest.fixture
def animal_encoder() -> LabelEncoder[str]:
    return LabelEncoderFitter().observe_many(["cat", "dog", "cat", "bird"]).finish()


class TestLabelEncoderFitting:
    """Tests for code assignment."""

    def test_first_seen_order(self, animal_encoder):
        """Codes follow first appearance: cat=0, dog=1, bird=2."""
        assert animal_encoder.classes == ("cat", "dog", "bird")
        assert animal_encoder.transform("cat") == 0
        assert animal_encoder.transform("dog") == 1
        assert animal_encoder.transform("bird") == 2
        assert len(animal_encoder) == 3

    def test_fitter_categories_track_observations(self):
        fitter = LabelEncoderFitter()
        fitter.observe("b")
        fitter.observe("a")
        fitter.observe("b")
        assert fitter.categories == ("b", "a")
        assert len(fitter) == 2

    def test_deterministic(self):
        """Same ordered input gives the same mapping."""
        keys = ["x", "y", "x", "z", "y"]
        first = LabelEncoderFitter().observe_many(keys).finish()
        second = LabelEncoderFitter().observe_many(keys).finish()
        assert first == second
        assert dict(first.mapping) == dict(second.mapping)

    def test_order_dependent(self):
        """A reordered input can give a different mapping."""
        first = LabelEncoderFitter().observe_many(["a", "b"]).finish()
        second = LabelEncoderFitter().observe_many(["b", "a"]).finish()
        assert first.transform("a") != second.transform("a")

    def test_integer_keys(self):
        encoder = LabelEncoderFitter().observe_many([10, 3, 10, 7]).finish()
        assert encoder.classes == (10, 3, 7)
        assert encoder.inverse_transform(1) == 3

    def test_empty_fit(self):
        with pytest.raises(EmptyFitError) as exc_info:
            LabelEncoderFitter().finish()
        assert exc_info.value.kind is ErrorKind.EMPTY_FIT

    def test_direct_construction_validates(self):
        with pytest.raises(EmptyFitError):
            LabelEncoder(classes=())
        with pytest.raises(InvalidDataError):
            LabelEncoder(classes=("a", "a"))


class TestLabelEncoderTransform:
    """Tests for encoding and decoding."""

    def test_codes_are_dense(self, animal_encoder):
        """Codes cover exactly 0..n-1."""
        codes = sorted(animal_encoder.mapping.values())
        assert codes == list(range(len(animal_encoder)))

    def test_bijection(self, animal_encoder):
        """inverse(transform(k)) == k and transform(inverse(c)) == c."""
        for key in animal_encoder.classes:
            assert animal_encoder.inverse_transform(animal_encoder.transform(key)) == key
        for code in range(len(animal_encoder)):
            assert animal_encoder.transform(animal_encoder.inverse_transform(code)) == code

    def test_transform_many(self, animal_encoder):
        codes = animal_encoder.transform_many(["bird", "cat", "dog", "cat"])
        assert codes.dtype == np.int64
        assert codes.tolist() == [2, 0, 1, 0]

    def test_inverse_transform_many(self, animal_encoder):
        assert animal_encoder.inverse_transform_many([2, 0]) == ["bird", "cat"]

    def test_unknown_category(self, animal_encoder):
        with pytest.raises(UnknownCategoryError) as exc_info:
            animal_encoder.transform("fish")
        assert exc_info.value.kind is ErrorKind.UNKNOWN_CATEGORY
        assert exc_info.value.key == "fish"

    def test_contains(self, animal_encoder):
        assert "cat" in animal_encoder
        assert "fish" not in animal_encoder

    def test_integral_float_code_accepted(self, animal_encoder):
        """Codes read back from float matrices still decode."""
        assert animal_encoder.inverse_transform(1.0) == "dog"
        assert animal_encoder.inverse_transform(np.int64(2)) == "bird"

    @pytest.mark.parametrize("code", [3, -1, 1.5, True, "1", None])
    def test_invalid_code(self, animal_encoder, code):
        """Codes outside [0, n) or of the wrong type are rejected."""
        with pytest.raises(InvalidCodeError) as exc_info:
            animal_encoder.inverse_transform(code)
        assert exc_info.value.kind is ErrorKind.INVALID_CODE
        assert exc_info.value.size == 3

    def test_mapping_read_only(self, animal_encoder):
        with pytest.raises(TypeError):
            animal_encoder.mapping["fish"] = 3  # type: ignore[index]
