"""
Reporting collaborators for the generation driver.

The driver hands a :class:`GenerationReport` to its reporters on every
reported generation and the best individual of the whole run at the end.
Reporters only read these values; the layout is up to each implementation.
"""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, TextIO

import numpy as np
import pandas as pd

from sga.core.logging import get_logger
from sga.utils.helpers import format_fitness
from .individual import Individual, Population, Problem

logger = get_logger(__name__)


@dataclass
class IndividualReport:
    """Reported view of one population slot."""

    index: int
    x: float
    y: float
    fitness: float
    chromosome: str
    decoded_x: float
    decoded_y: float


@dataclass
class GenerationReport:
    """Everything exposed about one generation."""

    generation: int
    selected: List[int]
    individuals: List[IndividualReport]
    best_of_generation: Optional[Individual] = None
    best_overall: Optional[Individual] = None
    disaster_slots: List[int] = field(default_factory=list)
    elite_applied: bool = False

    @classmethod
    def from_population(
        cls,
        generation: int,
        population: Population,
        problem: Problem,
        selected: Sequence[int] = (),
        **kwargs: Any
    ) -> "GenerationReport":
        """
        Snapshot a population.

        ``decoded_x``/``decoded_y`` are decoded again from each chromosome as
        it stands after crossover, mutation and elitism.
        """
        individuals = []
        for index, ind in enumerate(population):
            decoded_x, decoded_y = problem.decode_real(ind.chromosome)
            individuals.append(IndividualReport(
                index=index,
                x=ind.x,
                y=ind.y,
                fitness=ind.fitness,
                chromosome=ind.bits,
                decoded_x=decoded_x,
                decoded_y=decoded_y
            ))
        return cls(generation=generation, selected=list(selected), individuals=individuals, **kwargs)

    @property
    def fitnesses(self) -> List[float]:
        return [ind.fitness for ind in self.individuals]


class Reporter(ABC):
    """Abstract base class for generation reporters."""

    @abstractmethod
    def report_generation(self, report: GenerationReport) -> None:
        """Consume one reported generation."""
        pass

    @abstractmethod
    def report_final(self, best: Individual, summary: Dict[str, Any]) -> None:
        """Consume the best individual of the run."""
        pass


class LoggingReporter(Reporter):
    """Emits one log line per reported generation and a final summary."""

    def __init__(self, include_population: bool = False):
        """
        Args:
            include_population: Attach every individual to the log record's
                structured fields (only visible in the JSON log file)
        """
        self.include_population = include_population

    def report_generation(self, report: GenerationReport) -> None:
        fields: Dict[str, Any] = {
            "generation": report.generation,
            "selected": report.selected,
            "disaster_slots": report.disaster_slots,
            "elite_applied": report.elite_applied,
        }
        if self.include_population:
            fields["individuals"] = [vars(ind) for ind in report.individuals]

        message = f"Generation {report.generation}: avg={np.mean(report.fitnesses):.4f}"
        if report.best_of_generation is not None:
            message += f", generation best={report.best_of_generation.fitness:.4f}"
        if report.best_overall is not None:
            message += f", overall best={report.best_overall.fitness:.4f}"
        if report.disaster_slots:
            message += f", disaster on {len(report.disaster_slots)} slots"
        logger.info(message, extra={"extra_fields": fields})

    def report_final(self, best: Individual, summary: Dict[str, Any]) -> None:
        logger.info(
            f"Best result over all generations: {best.bits} "
            f"X {best.x:.4f} Y {best.y:.4f} fitness {best.fitness:.4f}",
            extra={"extra_fields": {"best": best.to_dict(), "summary": summary}}
        )


class TableReporter(Reporter):
    """Console table in the layout of the classic SGA report."""

    def __init__(self, stream: Optional[TextIO] = None, decimal_places: int = 4):
        self.stream = stream or sys.stdout
        self.decimal_places = decimal_places

    def _fmt(self, value: float) -> str:
        return format_fitness(value, self.decimal_places)

    def report_generation(self, report: GenerationReport) -> None:
        write = self.stream.write
        if report.best_of_generation is not None:
            best = report.best_of_generation
            write(f"\n   Best string: {best.bits} values: X {self._fmt(best.x)} Y {self._fmt(best.y)}\n")
            write(f" fitness: {self._fmt(best.fitness)}\n")
        write(f"\nGENERATION: {report.generation}\n")
        write("Selected Strings: " + " ".join(str(i) for i in report.selected) + "\n")
        write("\n\tX\tY\tf(x)\t\tnew_str\t\tX\tY\n")
        for ind in report.individuals:
            write(
                f"   {self._fmt(ind.x)} {self._fmt(ind.y)}\t{self._fmt(ind.fitness)}\t"
                f"{ind.chromosome}\t{self._fmt(ind.decoded_x)} {self._fmt(ind.decoded_y)}\n"
            )

    def report_final(self, best: Individual, summary: Dict[str, Any]) -> None:
        write = self.stream.write
        write("=" * 55 + "\n")
        write("Best result over all generations:\n")
        write(best.bits + "\n")
        write(f"Decoded values = X {self._fmt(best.x)} Y {self._fmt(best.y)}\n")
        write(f"  Fitness = {self._fmt(best.fitness)}\n")


class HistoryReporter(Reporter):
    """Collects reported generations into tabular form."""

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []
        self.best: Optional[Individual] = None
        self.summary: Dict[str, Any] = {}

    def report_generation(self, report: GenerationReport) -> None:
        for ind in report.individuals:
            self.rows.append({
                "generation": report.generation,
                "index": ind.index,
                "x": ind.x,
                "y": ind.y,
                "fitness": ind.fitness,
                "chromosome": ind.chromosome,
                "disaster": ind.index in report.disaster_slots,
            })

    def report_final(self, best: Individual, summary: Dict[str, Any]) -> None:
        self.best = best.copy()
        self.summary = dict(summary)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per individual per reported generation."""
        return pd.DataFrame(
            self.rows,
            columns=["generation", "index", "x", "y", "fitness", "chromosome", "disaster"]
        )


class CompositeReporter(Reporter):
    """Fans every call out to several reporters in order."""

    def __init__(self, reporters: Sequence[Reporter] = ()):
        self.reporters = list(reporters)

    def add(self, reporter: Reporter) -> None:
        self.reporters.append(reporter)

    def report_generation(self, report: GenerationReport) -> None:
        for reporter in self.reporters:
            reporter.report_generation(report)

    def report_final(self, best: Individual, summary: Dict[str, Any]) -> None:
        for reporter in self.reporters:
            reporter.report_final(best, summary)
