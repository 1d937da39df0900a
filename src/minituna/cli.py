import argparse
import sys
from typing import List, Optional

from . import __version__
from ._logging import set_verbosity
from .config import StudyConfig
from .core.study import Trial, create_study
from .exceptions import NoCompletedTrialsError


def quadratic_objective(trial: Trial) -> float:
    """f(x, y) = (x - 3)^2 + (y - 5)^2, minimized at x=3, y=5."""
    x = trial.suggest_float("x", 0, 10)
    y = trial.suggest_float("y", 0, 10)
    return (x - 3) ** 2 + (y - 5) ** 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minituna",
        description="Run a random-search study on a quadratic demo objective.",
    )
    parser.add_argument("--n-trials", type=int, default=100, help="The number of trials.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the sampler.")
    parser.add_argument(
        "--verbose", action="store_true", help="Log every finished trial."
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Command-line entry point.
    """
    args = build_parser().parse_args(argv)

    try:
        config = StudyConfig(
            n_trials=args.n_trials,
            seed=args.seed,
            verbose=args.verbose,
            log_level="INFO" if args.verbose else args.log_level,
        )
    except ValueError as e:
        print(f"Invalid arguments: {e}", file=sys.stderr)
        return 2

    set_verbosity(config.log_level)
    study = create_study(config=config)
    study.optimize(quadratic_objective)

    try:
        best = study.best_trial
    except NoCompletedTrialsError:
        print("No trial completed.")
        return 1

    print(f"Best trial| ID: {best.number}, value: {best.value}")
    for name, value in best.params.items():
        print(f"  {name}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
