"""
Optimization direction and the fitness comparison predicate.

Every ranking, elitism and best-tracking decision in the package goes
through :func:`is_better`, so switching between minimization and
maximization is a configuration change only.
"""

from enum import Enum
from typing import Union


class Direction(Enum):
    """Optimization direction, valued like the classic ``MAXMIN`` switch."""

    MINIMIZE = -1
    MAXIMIZE = 1

    @classmethod
    def from_value(cls, value: Union["Direction", str, int]) -> "Direction":
        """
        Parse a direction from configuration.

        Accepts a Direction, the names ``"minimize"``/``"maximize"`` (also
        ``"min"``/``"max"``, any case) or the integers ``-1``/``1``.

        Raises:
            ValueError: If the value names no direction
        """
        if isinstance(value, Direction):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Unknown optimization direction: {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ("minimize", "min", "-1"):
                return cls.MINIMIZE
            if key in ("maximize", "max", "1"):
                return cls.MAXIMIZE
        raise ValueError(f"Unknown optimization direction: {value!r}")

    def worst(self) -> float:
        """Fitness that every finite fitness beats."""
        return float("inf") if self is Direction.MINIMIZE else float("-inf")

    def is_better(self, a: float, b: float) -> bool:
        return is_better(a, b, self)

    def __str__(self) -> str:
        return self.name.lower()


def is_better(a: float, b: float, direction: Direction) -> bool:
    """
    Return True iff fitness ``a`` is strictly preferred over fitness ``b``.

    Args:
        a: Candidate fitness
        b: Fitness to beat
        direction: Optimization direction

    Returns:
        ``a < b`` when minimizing, ``a > b`` when maximizing
    """
    return direction.value * a > direction.value * b


def compare(a: float, b: float, direction: Direction) -> int:
    """Three-way comparator built on :func:`is_better` (better sorts first)."""
    if is_better(a, b, direction):
        return -1
    if is_better(b, a, direction):
        return 1
    return 0
