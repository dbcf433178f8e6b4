"""
Search CLI for the SGA optimizer.

This module provides the command-line interface for running a genetic search.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from ..core.config import Config, set_config
from ..core.exceptions import ConfigurationError
from ..core.logging import setup_logging, get_logger
from ..optimization.genetic import (
    GeneticSearch,
    OBJECTIVES,
    CompositeReporter,
    HistoryReporter,
    LoggingReporter,
    TableReporter
)
from ..utils.helpers import ensure_directory


def _load_config(parsed_args: argparse.Namespace) -> Config:
    """Load configuration and apply command-line overrides."""
    config = Config(config_file=parsed_args.config, env_file=parsed_args.env_file)

    search = config.search
    overrides = {
        "population_size": parsed_args.population_size,
        "chromosome_length": parsed_args.chromosome_length,
        "mutation_rate": parsed_args.mutation_rate,
        "max_generations": parsed_args.max_generations,
        "report_interval": parsed_args.report_interval,
        "disaster_period": parsed_args.disaster_period,
        "tournament_size": parsed_args.tournament_size,
        "direction": parsed_args.direction,
        "seed": parsed_args.seed,
        "patience": parsed_args.patience,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(search, key, value)
    if parsed_args.no_elitism:
        search.elitism = False

    domain = config.domain
    if parsed_args.objective:
        domain.objective = parsed_args.objective
    if parsed_args.x_range:
        domain.x_low, domain.x_high = parsed_args.x_range
    if parsed_args.y_range:
        domain.y_low, domain.y_high = parsed_args.y_range
    if parsed_args.cache_fitness:
        domain.cache_fitness = True

    if parsed_args.log_level:
        config.logging.level = parsed_args.log_level
    if parsed_args.log_file:
        config.logging.log_file = str(parsed_args.log_file)
        config.logging.enable_file = True

    config.validate()
    set_config(config)
    return config


def _save_plot(search: GeneticSearch, path: Path) -> None:
    """Plot best, average and best-overall fitness per generation."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    history = search.history_frame()
    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(history.index, history["avg_fitness"], label="average", alpha=0.4)
    ax.plot(history.index, history["best_fitness"], label="generation best", alpha=0.7)
    ax.plot(history.index, history["best_overall_fitness"], label="best overall")
    ax.set_xlabel("generation")
    ax.set_ylabel("fitness")
    ax.set_title(f"{search.problem.evaluator.name} ({search.direction})")
    ax.legend()
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)


def _write_outputs(search: GeneticSearch, history: HistoryReporter, output_dir: Path, plot: bool) -> List[Path]:
    """Write the run summary, generation history and optional plot."""
    ensure_directory(output_dir)
    written = []

    summary_path = output_dir / "best_individual.json"
    with open(summary_path, "w") as f:
        json.dump(search.get_search_summary(), f, indent=2, default=str)
    written.append(summary_path)

    history_path = output_dir / "history.csv"
    search.history_frame().to_csv(history_path)
    written.append(history_path)

    population_path = output_dir / "population.csv"
    history.to_dataframe().to_csv(population_path, index=False)
    written.append(population_path)

    if plot and search.generation_history:
        plot_path = output_dir / "fitness_history.png"
        _save_plot(search, plot_path)
        written.append(plot_path)

    return written


def run_command(args: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="sga run",
        description="Run the simple genetic algorithm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Minimize the sin-bowl objective with the classic settings
  sga run --seed 42

  # Short run on another objective, writing results and a plot
  sga run --objective rastrigin --x-range -5.12 5.12 --y-range -5.12 5.12 \\
      --max-generations 500 --report none --output-dir results --plot
        """
    )

    # -- Configuration ------------------------------------
    config_group = parser.add_argument_group('Configuration')
    config_group.add_argument('--config', '-c', type=Path, help='Path to configuration file (JSON)')
    config_group.add_argument('--env-file', '-e', type=Path, help='Path to .env file with overrides')

    # -- Search Parameters --------------------------------
    search_group = parser.add_argument_group('Genetic Search')
    search_group.add_argument('--population-size', type=int, help='Population size, even (default: 20)')
    search_group.add_argument('--chromosome-length', type=int, help='Chromosome length in bits, even (default: 32)')
    search_group.add_argument('--mutation-rate', type=float, help='Per-bit mutation probability (default: 0.08)')
    search_group.add_argument('--max-generations', type=int, help='Number of generations (default: 10000)')
    search_group.add_argument('--tournament-size', type=int, help='Candidates per tournament (default: 3)')
    search_group.add_argument('--disaster-period', type=int, help='Generations between disasters, 0 disables (default: 8)')
    search_group.add_argument('--no-elitism', action='store_true', help='Disable elitism')
    search_group.add_argument('--direction', choices=['minimize', 'maximize'], help='Optimization direction')
    search_group.add_argument('--seed', type=int, help='Random seed (default: wall clock)')
    search_group.add_argument('--patience', type=int, help='Stop after this many generations without improvement')

    # -- Problem ------------------------------------------
    problem_group = parser.add_argument_group('Problem')
    problem_group.add_argument('--objective', choices=sorted(OBJECTIVES), help='Objective function (default: sin_bowl)')
    problem_group.add_argument('--x-range', type=float, nargs=2, metavar=('LOW', 'HIGH'), help='Domain of x')
    problem_group.add_argument('--y-range', type=float, nargs=2, metavar=('LOW', 'HIGH'), help='Domain of y')
    problem_group.add_argument('--cache-fitness', action='store_true', help='Cache fitness by decoded genotype')

    # -- Output ------------------------------------------
    output_group = parser.add_argument_group('Output')
    output_group.add_argument('--report', choices=['log', 'table', 'none'], default='log', help='Per-generation report format')
    output_group.add_argument('--report-interval', type=int, help='Report every N generations (default: 1)')
    output_group.add_argument('--output-dir', type=Path, help='Directory to save results')
    output_group.add_argument('--plot', action='store_true', help='Save a fitness history plot to the output directory')
    output_group.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level')
    output_group.add_argument('--log-file', type=Path, help='Also write JSON logs to this file')

    parsed_args = parser.parse_args(args)

    try:
        config = _load_config(parsed_args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(
        level=config.logging.level,
        log_file=Path(config.logging.log_file),
        enable_console=config.logging.enable_console,
        enable_file=config.logging.enable_file
    )
    logger = get_logger(__name__)
    logger.info(f"Configuration: {config}")

    reporter = CompositeReporter()
    if parsed_args.report == 'log':
        reporter.add(LoggingReporter(include_population=config.logging.enable_file))
    elif parsed_args.report == 'table':
        reporter.add(TableReporter())
    history = HistoryReporter()
    if parsed_args.output_dir:
        reporter.add(history)

    search = GeneticSearch.from_config(config, reporter=reporter)
    best = search.run()

    print("\n=== Genetic Search Completed ===")
    print(f"Seed: {search.seed}")
    print(f"Generations: {search.generation}")
    print(f"Best chromosome: {best.bits}")
    print(f"Decoded values: X {best.x:.4f} Y {best.y:.4f}")
    print(f"Best fitness: {best.fitness:.4f}")

    if parsed_args.output_dir:
        written = _write_outputs(search, history, parsed_args.output_dir, parsed_args.plot)
        print(f"Results saved to: {parsed_args.output_dir}")
        for path in written:
            logger.info(f"Wrote {path}")


if __name__ == "__main__":
    run_command()
