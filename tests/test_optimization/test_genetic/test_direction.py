"""
Tests for the optimization direction and comparison predicate.
"""

import pytest
from functools import cmp_to_key

from sga.optimization.genetic.direction import Direction, compare, is_better

pytestmark = [
    pytest.mark.unit,
    pytest.mark.optimization,
    pytest.mark.genetic
]


class TestIsBetter:
    """Test the strict preference predicate."""

    def test_minimize_prefers_lower(self):
        """Test lower fitness wins when minimizing."""
        assert is_better(1.0, 2.0, Direction.MINIMIZE)
        assert not is_better(2.0, 1.0, Direction.MINIMIZE)

    def test_maximize_prefers_higher(self):
        """Test higher fitness wins when maximizing."""
        assert is_better(2.0, 1.0, Direction.MAXIMIZE)
        assert not is_better(1.0, 2.0, Direction.MAXIMIZE)

    @pytest.mark.parametrize("direction", list(Direction))
    def test_ties_are_not_better(self, direction):
        """Test equal fitness is never strictly better."""
        assert not is_better(3.5, 3.5, direction)

    @pytest.mark.parametrize("direction", list(Direction))
    def test_worst_is_beaten_by_finite_values(self, direction):
        """Test every finite fitness beats the direction's worst value."""
        assert direction.is_better(0.0, direction.worst())
        assert direction.is_better(-1e300, direction.worst())
        assert direction.is_better(1e300, direction.worst())

    def test_negative_values(self):
        """Test negative fitness values order correctly."""
        assert is_better(-2500.0, -10.0, Direction.MINIMIZE)
        assert is_better(-10.0, -2500.0, Direction.MAXIMIZE)


class TestCompare:
    """Test the three-way comparator."""

    def test_compare_values(self):
        """Test the comparator sign convention (better sorts first)."""
        assert compare(1.0, 2.0, Direction.MINIMIZE) == -1
        assert compare(2.0, 1.0, Direction.MINIMIZE) == 1
        assert compare(1.0, 1.0, Direction.MINIMIZE) == 0

    def test_sorting(self):
        """Test sorting best-first in both directions."""
        values = [3.0, -1.0, 2.0]
        assert sorted(values, key=cmp_to_key(lambda a, b: compare(a, b, Direction.MINIMIZE))) == [-1.0, 2.0, 3.0]
        assert sorted(values, key=cmp_to_key(lambda a, b: compare(a, b, Direction.MAXIMIZE))) == [3.0, 2.0, -1.0]


class TestDirectionParsing:
    """Test parsing directions from configuration values."""

    @pytest.mark.parametrize("value,expected", [
        ("minimize", Direction.MINIMIZE),
        ("MIN", Direction.MINIMIZE),
        (" maximize ", Direction.MAXIMIZE),
        ("max", Direction.MAXIMIZE),
        (-1, Direction.MINIMIZE),
        (1, Direction.MAXIMIZE),
        ("-1", Direction.MINIMIZE),
        (Direction.MAXIMIZE, Direction.MAXIMIZE),
    ])
    def test_from_value(self, value, expected):
        """Test accepted spellings."""
        assert Direction.from_value(value) is expected

    @pytest.mark.parametrize("value", ["sideways", 0, 2, True, None, 1.0])
    def test_from_value_rejects(self, value):
        """Test unknown directions raise ValueError."""
        with pytest.raises(ValueError):
            Direction.from_value(value)

    def test_str(self):
        """Test the lowercase display name."""
        assert str(Direction.MINIMIZE) == "minimize"
        assert str(Direction.MAXIMIZE) == "maximize"
