"""
Decode CLI for the SGA optimizer.

Decodes a chromosome given on the command line and evaluates it, which is
handy for inspecting the bit strings printed in reports.
"""

import argparse
import sys
from typing import Optional

from ..core.logging import get_logger, log_with_correlation
from ..core.exceptions import SGAException
from ..optimization.genetic import DomainMapping, FitnessEvaluator, OBJECTIVES, Problem, get_objective
from ..utils.helpers import parse_bits


@log_with_correlation
def decode_command(args: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="sga decode",
        description="Decode and evaluate a chromosome"
    )
    parser.add_argument('chromosome', help='Bit string, e.g. 0110...')
    parser.add_argument('--objective', choices=sorted(OBJECTIVES), default='sin_bowl', help='Objective function')
    parser.add_argument('--x-range', type=float, nargs=2, default=(-60.0, 60.0), metavar=('LOW', 'HIGH'))
    parser.add_argument('--y-range', type=float, nargs=2, default=(-60.0, 60.0), metavar=('LOW', 'HIGH'))

    parsed_args = parser.parse_args(args)
    logger = get_logger(__name__)

    try:
        bits = parse_bits(parsed_args.chromosome)
        problem = Problem(
            chromosome_length=len(bits),
            x_domain=DomainMapping(*parsed_args.x_range),
            y_domain=DomainMapping(*parsed_args.y_range),
            evaluator=FitnessEvaluator(get_objective(parsed_args.objective))
        )
        individual = problem.evaluate_chromosome(bits)
    except (ValueError, SGAException) as e:
        logger.error(f"Cannot decode chromosome: {e}")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    print(f"Chromosome: {individual.bits}")
    print(f"Raw values: X {individual.x_raw} Y {individual.y_raw}")
    print(f"Decoded values: X {individual.x:.4f} Y {individual.y:.4f}")
    print(f"Fitness ({parsed_args.objective}): {individual.fitness:.4f}")


if __name__ == "__main__":
    decode_command()
