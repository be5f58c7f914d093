"""Tests for utility functions."""

from pymirror.utils import RESERVE_MARGIN, format_percent, format_size


class TestFormatSize:
    """Tests for format_size function."""

    def test_bytes(self):
        """Test formatting bytes."""
        assert format_size(0) == "0 B"
        assert format_size(512) == "512 B"
        assert format_size(1023) == "1023 B"

    def test_kilobytes(self):
        """Test formatting kilobytes."""
        assert format_size(1024) == "1.0 KB"
        assert format_size(1536) == "1.5 KB"

    def test_megabytes(self):
        """Test formatting megabytes."""
        assert format_size(RESERVE_MARGIN) == "10.0 MB"

    def test_gigabytes(self):
        """Test formatting gigabytes."""
        assert format_size(3 * 1024 * 1024 * 1024) == "3.0 GB"


class TestFormatPercent:
    """Tests for format_percent function."""

    def test_half(self):
        assert format_percent(1, 2) == "50.00%"

    def test_complete(self):
        assert format_percent(3, 3) == "100.00%"

    def test_fraction(self):
        assert format_percent(1, 3) == "33.33%"

    def test_zero_total(self):
        """An empty batch does not divide by zero."""
        assert format_percent(0, 0) == "0.00%"
