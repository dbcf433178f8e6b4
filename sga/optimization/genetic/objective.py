"""
Objective functions and fitness evaluation.

An objective is any callable ``f(x, y) -> float``. The reference objective is
the multimodal "sin bowl" surface; a few classic test surfaces are registered
next to it so a run can switch objectives by name.
"""

from typing import Callable, Dict, Optional, Tuple

import numpy as np

from sga.core.exceptions import EvaluationError
from sga.core.logging import get_logger

logger = get_logger(__name__)

Objective = Callable[[float, float], float]


def sin_bowl(x: float, y: float) -> float:
    """f(x, y) = (2|3y| - 12 sin x) * 2y * cos 2x"""
    return float((2.0 * np.abs(3.0 * y) - 12.0 * np.sin(x)) * 2.0 * y * np.cos(2.0 * x))


def sphere(x: float, y: float) -> float:
    return float(x * x + y * y)


def rastrigin(x: float, y: float) -> float:
    return float(
        20.0
        + (x * x - 10.0 * np.cos(2.0 * np.pi * x))
        + (y * y - 10.0 * np.cos(2.0 * np.pi * y))
    )


def himmelblau(x: float, y: float) -> float:
    return float((x * x + y - 11.0) ** 2 + (x + y * y - 7.0) ** 2)


OBJECTIVES: Dict[str, Objective] = {
    "sin_bowl": sin_bowl,
    "sphere": sphere,
    "rastrigin": rastrigin,
    "himmelblau": himmelblau,
}


def get_objective(name: str) -> Objective:
    """
    Look up a registered objective by name.

    Raises:
        ValueError: If no objective is registered under ``name``
    """
    try:
        return OBJECTIVES[name]
    except KeyError:
        raise ValueError(
            f"Unknown objective '{name}', expected one of {sorted(OBJECTIVES)}"
        ) from None


class FitnessEvaluator:
    """
    Evaluates an objective and guards the result.

    A non-finite fitness is an internal invariant violation and raises
    :class:`EvaluationError`. Results can optionally be cached on the raw
    integer pair, which is all the phenotype depends on.
    """

    def __init__(self, objective: Objective = sin_bowl, cache_results: bool = False):
        """
        Initialize fitness evaluator.

        Args:
            objective: Callable mapping ``(x, y)`` to a fitness
            cache_results: Whether to cache evaluation results
        """
        self.objective = objective
        self.cache_results = cache_results
        self._cache: Dict[Tuple[int, int], float] = {}
        self._cache_hits = 0
        self._cache_misses = 0

    def evaluate(self, x: float, y: float) -> float:
        """
        Evaluate the objective at ``(x, y)``.

        Raises:
            EvaluationError: If the objective returns NaN or an infinity
        """
        fitness = float(self.objective(x, y))
        if not np.isfinite(fitness):
            raise EvaluationError(
                "Objective produced a non-finite fitness",
                details={"x": x, "y": y, "fitness": fitness},
            )
        return fitness

    def evaluate_raw(self, x_raw: int, y_raw: int, x: float, y: float) -> float:
        """Evaluate with caching keyed on the raw pair."""
        if not self.cache_results:
            return self.evaluate(x, y)

        key = (x_raw, y_raw)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache_hits += 1
            return cached

        self._cache_misses += 1
        fitness = self.evaluate(x, y)
        self._cache[key] = fitness
        return fitness

    def clear_cache(self) -> None:
        """Clear the evaluation cache."""
        self._cache.clear()
        self._cache_hits = 0
        self._cache_misses = 0

    def get_cache_stats(self) -> Dict[str, int]:
        """Get cache statistics."""
        return {
            "cached_results": len(self._cache),
            "cache_hits": self._cache_hits,
            "cache_misses": self._cache_misses
        }

    @property
    def name(self) -> Optional[str]:
        return getattr(self.objective, "__name__", None)
