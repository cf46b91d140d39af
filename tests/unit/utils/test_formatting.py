"""Unit tests for formatting utilities.

Tests cover:
- All unit boundaries (o, Ko, Mo, Go)
- Edge cases (zero, negative, very large values)
- Property-based testing with Hypothesis
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from file_inventory.utils.formatting import format_duration, format_size


@pytest.mark.unit
class TestFormatSize:
    """Test suite for format_size function."""

    @pytest.mark.parametrize(
        ("bytes_value", "expected"),
        [
            # Bytes range (< 1024)
            (0, "0 o"),
            (1, "1 o"),
            (512, "512 o"),
            (1023, "1023 o"),
            # Ko range
            (1024, "1.00 Ko"),
            (1536, "1.50 Ko"),
            (1024**2 - 1, "1024.00 Ko"),
            # Mo range
            (1024**2, "1.00 Mo"),
            (12939428, "12.34 Mo"),
            # Go range and beyond
            (1024**3, "1.00 Go"),
            (1024**3 * 10, "10.00 Go"),
            (5 * 1024**4, "5120.00 Go"),
        ],
    )
    def test_format_size_boundaries(self, bytes_value: int, expected: str) -> None:
        """Test format_size at all unit boundaries."""
        assert format_size(bytes_value) == expected

    def test_format_size_negative_raises_error(self) -> None:
        """Test that negative bytes raise ValueError."""
        with pytest.raises(ValueError, match="num_bytes must be non-negative"):
            _ = format_size(-1)

    @given(st.integers(min_value=0, max_value=1024**5))
    def test_format_size_always_has_unit(self, bytes_value: int) -> None:
        """Test that every non-negative size renders with a unit suffix."""
        result = format_size(bytes_value)

        assert result.split(" ")[-1] in {"o", "Ko", "Mo", "Go"}


@pytest.mark.unit
class TestFormatDuration:
    """Test suite for format_duration function."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "0.00s"),
            (0.25, "0.25s"),
            (59.5, "59.50s"),
            (60, "1m"),
            (90, "1m 30s"),
            (3600, "1h"),
            (3665, "1h 1m"),
        ],
    )
    def test_format_duration(self, seconds: float, expected: str) -> None:
        """Test duration formatting across units."""
        assert format_duration(seconds) == expected

    def test_format_duration_negative_raises_error(self) -> None:
        """Test that negative durations raise ValueError."""
        with pytest.raises(ValueError, match="seconds must be non-negative"):
            _ = format_duration(-0.5)
