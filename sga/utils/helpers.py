"""
Helper utilities for the SGA optimizer.
"""

from pathlib import Path
from typing import Sequence, Union

import numpy as np


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        Path object for the directory
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def format_bits(bits: Sequence[int]) -> str:
    """Render a chromosome as a string of 0s and 1s."""
    return "".join(str(int(bit)) for bit in bits)


def parse_bits(text: str) -> np.ndarray:
    """
    Parse a string of 0s and 1s into a chromosome.

    Raises:
        ValueError: If the string contains anything else
    """
    text = text.strip()
    if not text or set(text) - {"0", "1"}:
        raise ValueError(f"Not a bit string: {text!r}")
    return np.array([int(c) for c in text], dtype=np.uint8)


def format_fitness(value: float, decimal_places: int = 4) -> str:
    """Fixed-point rendering used by the console reports."""
    return f"{value:.{decimal_places}f}"
