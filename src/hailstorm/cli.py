"""Command line interface for the hailstone crossing counter and rock solver."""
from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path

from .config import DEFAULT_BOUND, HailstormConfig, load_config
from .crossings import count_crossings_in
from .models import Bound
from .parsing import load_particles
from .rock import SolverError, solve_first_triple, solve_rock_with_retries

LOGGER = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Count in-window hailstone path crossings and solve for the rock trajectory."
    )
    parser.add_argument("input", type=Path, nargs="?", default=None, help="Particle list, one record per line")
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON configuration file")
    parser.add_argument("--min", dest="minimum", type=int, default=None, help="Lower edge of the crossing window")
    parser.add_argument("--max", dest="maximum", type=int, default=None, help="Upper edge of the crossing window")
    parser.add_argument("--iterations", type=int, default=None, help="Newton iteration budget")
    parser.add_argument("--workers", type=int, default=None, help="Threads used by the crossing counter")
    parser.add_argument(
        "--retry", action="store_true", help="Try further hailstone triples when the first solve fails"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging output")
    parser.add_argument(
        "--dump", action="store_true", help="Print both results and the solver state as JSON"
    )
    args = parser.parse_args(argv)
    if args.input is None and args.config is None:
        parser.error("either an input file or --config is required")
    return args


def resolve_config(args: argparse.Namespace) -> HailstormConfig:
    """Merge command line overrides on top of the optional configuration file."""

    if args.config is not None:
        config = load_config(args.config)
    else:
        config = HailstormConfig(input=args.input, bound=Bound(*DEFAULT_BOUND))

    changes: dict[str, object] = {}
    if args.input is not None:
        changes["input"] = args.input
    if args.minimum is not None or args.maximum is not None:
        minimum = args.minimum if args.minimum is not None else config.bound.minimum
        maximum = args.maximum if args.maximum is not None else config.bound.maximum
        changes["bound"] = Bound(minimum, maximum)
    if args.iterations is not None:
        changes["iterations"] = args.iterations
    if args.workers is not None:
        changes["workers"] = args.workers
    if args.retry:
        changes["retry"] = True
    return dataclasses.replace(config, **changes)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = resolve_config(args)
        particles = load_particles(config.input)
    except (OSError, ValueError) as exc:
        LOGGER.error("Could not load input: %s", exc)
        return 1
    LOGGER.info("Loaded %s particles from %s", len(particles), config.input)

    solve = solve_rock_with_retries if config.retry else solve_first_triple
    try:
        crossings = count_crossings_in(particles, config.bound, workers=config.workers)
        solution = solve(particles, config.iterations, seed=config.seed, tolerance=config.tolerance)
    except (SolverError, ValueError) as exc:
        LOGGER.error("Computation failed: %s", exc)
        return 1

    if args.dump:
        payload = {
            "crossings": crossings,
            "rock": solution.coordinate_sum,
            "bound": [config.bound.minimum, config.bound.maximum],
            "solver": {
                "position": list(solution.position),
                "velocity": list(solution.velocity),
                "hit_times": list(solution.hit_times),
                "iterations": solution.iterations,
                "residual_norm": solution.residual_norm,
            },
        }
        print(json.dumps(payload, indent=2))
    else:
        print(f"crossings = {crossings}")
        print(f"rock = {solution.coordinate_sum}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
