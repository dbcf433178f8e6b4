"""
Genotype to phenotype decoding.

A chromosome of ``L`` bits is split into two halves of ``L/2`` bits. Each
half is read as an unsigned big-endian integer (the first bit of the half is
the most significant) and then mapped affinely onto a real interval.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np


def bits_to_int(bits: Sequence[int]) -> int:
    """Interpret ``bits`` as an unsigned big-endian binary integer."""
    value = 0
    for bit in bits:
        value = (value << 1) | int(bit)
    return value


def encode(value: int, bits: int) -> np.ndarray:
    """
    Encode a non-negative integer into ``bits`` big-endian bits.

    Raises:
        ValueError: If ``value`` does not fit in ``bits`` bits
    """
    if value < 0 or value > max_raw(bits):
        raise ValueError(f"{value} does not fit in {bits} bits")
    return np.array([(value >> shift) & 1 for shift in range(bits - 1, -1, -1)], dtype=np.uint8)


def decode(chromosome: Sequence[int]) -> Tuple[int, int]:
    """
    Decode a chromosome into its raw integer pair.

    Args:
        chromosome: Even-length bit sequence

    Returns:
        ``(x_raw, y_raw)`` read from the first and second halves
    """
    half = len(chromosome) // 2
    return bits_to_int(chromosome[:half]), bits_to_int(chromosome[half:])


def encode_pair(x_raw: int, y_raw: int, chromosome_length: int) -> np.ndarray:
    """Build a chromosome whose halves decode to ``x_raw`` and ``y_raw``."""
    half = chromosome_length // 2
    return np.concatenate([encode(x_raw, half), encode(y_raw, half)])


def max_raw(bits: int) -> int:
    """Largest integer representable in ``bits`` bits."""
    return (1 << bits) - 1


@dataclass(frozen=True)
class DomainMapping:
    """Closed real interval ``[low, high]`` that raw integers are mapped onto."""

    low: float = -60.0
    high: float = 60.0

    def to_real(self, raw: int, bits: int) -> float:
        """
        Map a raw integer of ``bits`` bits onto ``[low, high]``.

        ``0`` maps to ``low`` and ``2**bits - 1`` maps to ``high``.
        """
        return (raw / max_raw(bits)) * (self.high - self.low) + self.low

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high
