"""Timing, report files and batch statistics for the two engines.

``timed_search`` runs one engine once and records the wall-clock duration.
``format_report``/``write_report`` produce the per-engine result files.
``run_batch`` generates many random maps, runs both engines under both
scenarios on each, and aggregates execution times and win/loss tallies.
"""

from __future__ import annotations

import random
import statistics
import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .agents import SCENARIOS, Position
from .environment import GridMap, format_path, render_ascii_map
from .logging_utils import log_search
from .search import AStarSearch, BacktrackingSearch, SearchEngine


@dataclass
class SearchOutcome:
    """Result of one timed ``find_path`` call."""

    algorithm: str
    scenario: int
    path: Optional[List[Position]]
    elapsed_ms: float

    @property
    def won(self) -> bool:
        return self.path is not None

    @property
    def moves(self) -> Optional[int]:
        return len(self.path) - 1 if self.path is not None else None


def timed_search(engine: SearchEngine) -> SearchOutcome:
    """Run ``engine.find_path()`` and measure how long it took."""
    started = time.perf_counter()
    path = engine.find_path()
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    return SearchOutcome(
        algorithm=engine.name,
        scenario=engine.grid.scenario,
        path=path,
        elapsed_ms=elapsed_ms,
    )


def format_report(outcome: SearchOutcome, grid: GridMap) -> str:
    """Format a single run the way the output files expect.

    A loss is just ``Loss``. A win lists the move count, the path, the map
    with the path drawn on it and the execution time.
    """
    if not outcome.won:
        return "Loss\n"

    lines = [
        "Win",
        str(outcome.moves),
        format_path(outcome.path),
        render_ascii_map(grid, outcome.path),
        f"{outcome.elapsed_ms} ms",
    ]
    return "\n".join(lines) + "\n"


def write_report(outcome: SearchOutcome, grid: GridMap, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_report(outcome, grid), encoding="utf-8")
    return path


@dataclass
class AlgorithmStats:
    """Execution times and results of one algorithm under one scenario."""

    execution_times: List[float] = field(default_factory=list)
    wins: int = 0
    losses: int = 0

    @property
    def runs(self) -> int:
        return self.wins + self.losses

    @property
    def mean(self) -> float:
        return statistics.fmean(self.execution_times) if self.execution_times else 0.0

    @property
    def median(self) -> float:
        return statistics.median(self.execution_times) if self.execution_times else 0.0

    @property
    def mode(self) -> Optional[str]:
        """Most frequent execution time rounded to 2 decimals, or None if nothing repeats."""
        if not self.execution_times:
            return None
        counts = Counter(f"{value:.2f}" for value in self.execution_times)
        value, count = counts.most_common(1)[0]
        return value if count > 1 else None

    @property
    def std_dev(self) -> float:
        # Sample standard deviation; undefined for fewer than two runs
        if len(self.execution_times) < 2:
            return 0.0
        return statistics.stdev(self.execution_times)

    @property
    def win_percentage(self) -> float:
        return self.wins / self.runs * 100 if self.runs else 0.0

    @property
    def loss_percentage(self) -> float:
        return self.losses / self.runs * 100 if self.runs else 0.0


class Analysis:
    """Aggregates ``SearchOutcome``s per (algorithm, scenario)."""

    def __init__(self) -> None:
        self._stats: Dict[Tuple[str, int], AlgorithmStats] = {}

    def stats(self, algorithm: str, scenario: int) -> AlgorithmStats:
        return self._stats.setdefault((algorithm, scenario), AlgorithmStats())

    def record(self, outcome: SearchOutcome) -> None:
        stats = self.stats(outcome.algorithm, outcome.scenario)
        stats.execution_times.append(outcome.elapsed_ms)
        if outcome.won:
            stats.wins += 1
        else:
            stats.losses += 1

    def keys(self) -> List[Tuple[str, int]]:
        return sorted(self._stats, key=lambda key: (key[1], key[0]))

    def summary(self, algorithm: str, scenario: int) -> str:
        stats = self.stats(algorithm, scenario)
        lines = [
            f"{algorithm} with scenario {scenario}:",
            f"Mean execution time: {stats.mean:f} ms",
            f"Mode execution time: {stats.mode} ms",
            f"Median execution time: {stats.median:f} ms",
            f"Standard deviation execution time: {stats.std_dev:f} ms",
            f"Wins: {stats.wins}",
            f"Losses: {stats.losses}",
            f"Wins percentage: {stats.win_percentage:.2f}",
            f"Losses percentage: {stats.loss_percentage:.2f}",
        ]
        return "\n".join(lines)


def run_batch(
    maps: int,
    rng: Optional[random.Random] = None,
    *,
    max_depth: Optional[int] = None,
) -> Analysis:
    """Generate ``maps`` random maps and run both engines under both scenarios.

    Each map is private to its iteration; engines run one after another and
    restore the map between runs.
    """
    rng = rng or random.Random()
    analysis = Analysis()

    for index in range(maps):
        grid = GridMap.generate(SCENARIOS[0], rng)
        for scenario in SCENARIOS:
            grid.set_scenario(scenario)
            for engine in (AStarSearch(grid), BacktrackingSearch(grid, max_depth=max_depth)):
                analysis.record(timed_search(engine))
        log_search(f"[Analysis] map {index + 1}/{maps}: {grid.layout().to_text()}")

    return analysis
