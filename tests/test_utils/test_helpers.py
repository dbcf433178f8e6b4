"""
Tests for SGA helper functions.
"""

import pytest
import numpy as np

from sga.utils.helpers import ensure_directory, format_bits, format_fitness, parse_bits

pytestmark = [
    pytest.mark.unit,
    pytest.mark.utils
]


class TestEnsureDirectory:
    """Test directory creation."""

    def test_creates_nested_directory(self, temp_dir):
        """Test missing parents are created."""
        path = ensure_directory(temp_dir / "a" / "b")
        assert path.is_dir()

    def test_existing_directory(self, temp_dir):
        """Test an existing directory is accepted."""
        assert ensure_directory(str(temp_dir)) == temp_dir


class TestBitStrings:
    """Test rendering and parsing chromosomes."""

    def test_format_bits(self):
        """Test rendering a numpy chromosome."""
        assert format_bits(np.array([1, 0, 1, 1], dtype=np.uint8)) == "1011"
        assert format_bits([]) == ""

    def test_parse_bits(self):
        """Test parsing a bit string."""
        bits = parse_bits(" 0110 ")
        assert bits.dtype == np.uint8
        assert bits.tolist() == [0, 1, 1, 0]

    @pytest.mark.parametrize("text", ["", "0120", "10 01", "abc"])
    def test_parse_bits_rejects(self, text):
        """Test anything but 0s and 1s is rejected."""
        with pytest.raises(ValueError, match="Not a bit string"):
            parse_bits(text)

    def test_parse_format_inverse(self):
        """Test parsing the rendered form gives the same bits."""
        text = "0011101001011100"
        assert format_bits(parse_bits(text)) == text


class TestFormatFitness:
    """Test fixed-point rendering."""

    def test_default_places(self):
        """Test four decimal places by default."""
        assert format_fitness(-1234.56789) == "-1234.5679"

    def test_custom_places(self):
        """Test a custom precision."""
        assert format_fitness(2.0, decimal_places=1) == "2.0"
