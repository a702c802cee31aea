# tests/test_limits.py
"""
Tests for Limits, LimitsOverride and the fit check.

Verifies:
1. Limits accept snake_case and camelCase, reject negatives, are immutable
2. Overrides replace only the fields they set
3. check_fits reports the first violation in byte -> char -> token order
4. ensure_fits raises LimitExceededError with structured fields
"""

import pytest
from pydantic import ValidationError

from promptfit.core.chunk import Image
from promptfit.core.exceptions import LimitExceededError
from promptfit.core.limits import (
    FitResult,
    LimitDimension,
    Limits,
    LimitsOverride,
    check_fits,
    ensure_fits,
)

from .factories import make_limits


class TestLimitsModel:
    """Tests for the Limits value type."""

    def test_camel_case_aliases(self):
        limits = Limits.model_validate(
            {
                "maxTokens": 10,
                "maxChars": 40,
                "maxBytes": 80,
                "maxImages": 1,
                "imageByteLimit": 100,
            }
        )
        assert limits.max_tokens == 10
        assert limits.max_chars == 40
        assert limits.max_bytes == 80
        assert limits.max_images == 1
        assert limits.image_byte_limit == 100

    def test_image_fields_default_to_zero(self):
        limits = Limits(max_tokens=1, max_chars=1, max_bytes=1)
        assert limits.max_images == 0
        assert limits.image_byte_limit == 0

    def test_negative_values_rejected(self):
        with pytest.raises(ValidationError):
            make_limits(max_bytes=-1)

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            Limits(max_tokens=1, max_chars=1, max_bytes=1, max_pixels=5)

    def test_immutable(self):
        limits = make_limits()
        with pytest.raises(ValidationError):
            limits.max_bytes = 5


class TestLimitsOverride:
    """Tests for field-level overrides."""

    def test_only_set_fields_change(self):
        base = make_limits(max_bytes=1000, max_chars=500, max_tokens=250, max_images=3)
        merged = LimitsOverride(max_bytes=200).apply(base)

        assert merged.max_bytes == 200
        assert merged.max_chars == 500
        assert merged.max_tokens == 250
        assert merged.max_images == 3

    def test_camel_case_override(self):
        merged = LimitsOverride.model_validate({"maxChars": 7}).apply(make_limits())
        assert merged.max_chars == 7

    def test_zero_is_a_real_override(self):
        merged = LimitsOverride(max_images=0).apply(make_limits(max_images=5))
        assert merged.max_images == 0

    def test_negative_override_rejected(self):
        with pytest.raises(ValidationError):
            LimitsOverride(max_tokens=-3)


class TestCheckFits:
    """Tests for check_fits priority order."""

    def test_fits(self, small_limits):
        assert check_fits("hello", [], small_limits) == FitResult(True)

    def test_bytes_reported_before_chars(self, small_limits):
        """600 two-byte chars break both bytes and chars; bytes win."""
        result = check_fits("é" * 600, [], small_limits)

        assert not result.fits
        assert result.dimension is LimitDimension.MAX_BYTES
        assert result.actual == 1200
        assert result.allowed == 1000

    def test_chars(self):
        result = check_fits("a" * 600, [], make_limits(max_bytes=10000, max_tokens=10000))

        assert result.dimension is LimitDimension.MAX_CHARS
        assert (result.actual, result.allowed) == (600, 500)

    def test_tokens(self):
        limits = make_limits(max_bytes=1000, max_chars=1000, max_tokens=10)
        result = check_fits("a" * 41, [], limits)

        assert result.dimension is LimitDimension.MAX_TOKENS
        assert (result.actual, result.allowed) == (11, 10)

    def test_image_bytes_count_towards_bytes(self, small_limits):
        images = [Image(data=b"x" * 995)]
        result = check_fits("a" * 10, images, small_limits)

        assert result.dimension is LimitDimension.MAX_BYTES
        assert result.actual == 1005

    def test_exact_limit_fits(self):
        limits = make_limits(max_bytes=8, max_chars=8, max_tokens=2)
        assert check_fits("abcdefgh", [], limits).fits


class TestEnsureFits:
    """Tests for the raising variant."""

    def test_passes_when_fitting(self, small_limits):
        ensure_fits("hello", [], small_limits)

    def test_raises_first_violation(self, small_limits):
        with pytest.raises(LimitExceededError) as exc_info:
            ensure_fits("a" * 2000, [], small_limits, provider="openai", model="gpt-4o")

        err = exc_info.value
        assert err.limit is LimitDimension.MAX_BYTES
        assert err.actual == 2000
        assert err.allowed == 1000
        assert err.provider == "openai"
        assert err.model == "gpt-4o"
