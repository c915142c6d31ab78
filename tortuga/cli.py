"""Command-line entry point.

Examples:

    tortuga generate --scenario 2 --seed 7
    tortuga load --input input.txt
    tortuga analyse --maps 200 --seed 1

``generate`` and ``load`` run both engines on one map and write
``outputAStar.txt`` / ``outputBacktracking.txt``. ``analyse`` prints
execution-time statistics and win/loss tallies over many random maps.
"""

from __future__ import annotations

import argparse
import random
from pathlib import Path
from typing import List, Optional

from .analysis import run_batch, timed_search, write_report
from .config import Config
from .environment import GridMap, InvalidPlacementError, MalformedInputError, render_ascii_map
from .logging_utils import log_error, log_info, log_success, log_warning
from .scenario import MapLoader
from .search import AStarSearch, BacktrackingSearch


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tortuga",
        description="Find Jack Sparrow's shortest route to the Dead Man's Chest with A* and backtracking",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Solve a randomly generated map")
    generate.add_argument(
        "--scenario",
        type=int,
        choices=(1, 2),
        default=Config.DEFAULT_SCENARIO,
        help="Perception scenario of Jack Sparrow",
    )
    generate.add_argument("--seed", type=int, default=Config.SEED, help="Seed for reproducible maps")
    generate.add_argument(
        "--save-input",
        type=Path,
        default=None,
        help="Also write the generated map in input-file format to this path",
    )
    generate.add_argument("--output-dir", type=Path, default=Config.OUTPUT_DIR, help="Where to write result files")

    load = subparsers.add_parser("load", help="Solve the map described in an input file")
    load.add_argument("--input", type=Path, default=Config.INPUT_FILE, help="Two-line input file")
    load.add_argument("--output-dir", type=Path, default=Config.OUTPUT_DIR, help="Where to write result files")

    analyse = subparsers.add_parser("analyse", help="Collect statistics over many random maps")
    analyse.add_argument("--maps", type=int, default=Config.ANALYSIS_MAPS, help="Number of maps to generate")
    analyse.add_argument("--seed", type=int, default=Config.SEED, help="Seed for reproducible batches")
    analyse.add_argument(
        "--max-depth",
        type=int,
        default=Config.MAX_SEARCH_DEPTH,
        help="Backtracking depth cap in moves",
    )

    return parser.parse_args(argv)


def solve(grid: GridMap, output_dir: Path) -> None:
    """Run both engines on ``grid`` and write one result file per engine."""
    log_info(f"Scenario {grid.scenario}, agents: {grid.layout().to_text()}")
    print(render_ascii_map(grid))

    engines = (
        (AStarSearch(grid), Config.ASTAR_OUTPUT_NAME),
        (BacktrackingSearch(grid), Config.BACKTRACKING_OUTPUT_NAME),
    )
    for engine, filename in engines:
        outcome = timed_search(engine)
        report_path = write_report(outcome, grid, output_dir / filename)
        if outcome.won:
            log_success(
                f"[{outcome.algorithm}] Win in {outcome.moves} moves ({outcome.elapsed_ms:.3f} ms) -> {report_path}"
            )
        else:
            log_error(f"[{outcome.algorithm}] Loss: the Chest cannot be reached -> {report_path}")


def run_generate(args: argparse.Namespace) -> int:
    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    grid = GridMap.generate(args.scenario, rng)
    if args.save_input is not None:
        saved = MapLoader(args.save_input).save(grid.layout())
        log_info(f"Map saved to {saved}")
    solve(grid, args.output_dir)
    return 0


def run_load(args: argparse.Namespace) -> int:
    try:
        grid = MapLoader(args.input).load()
    except FileNotFoundError as exc:
        log_error(str(exc))
        return 1
    except MalformedInputError as exc:
        log_error(f"Invalid data: {exc}")
        return 1
    except InvalidPlacementError as exc:
        log_error(f"Invalid data: {exc}")
        return 1

    solve(grid, args.output_dir)
    return 0


def run_analyse(args: argparse.Namespace) -> int:
    if args.maps < 1:
        log_error("--maps must be at least 1")
        return 1
    if args.max_depth < Config.MAX_SEARCH_DEPTH:
        log_warning(
            f"Backtracking capped at {args.max_depth} moves; longer routes will count as losses"
        )

    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    log_info(f"Running both engines on {args.maps} random maps...")
    analysis = run_batch(args.maps, rng, max_depth=args.max_depth)

    for algorithm, scenario in analysis.keys():
        print(analysis.summary(algorithm, scenario))
        print()
    log_success("Analysis complete")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        Config.validate()
    except ValueError as exc:
        log_error(f"Invalid configuration: {exc}")
        return 1

    match args.command:
        case "generate":
            return run_generate(args)
        case "load":
            return run_load(args)
        case "analyse":
            return run_analyse(args)
        case _:
            log_error(f"Unknown command {args.command!r}")
            return 2


if __name__ == "__main__":
    raise SystemExit(main())
