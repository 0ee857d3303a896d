"""Command-line entry point for the grant matching engine.

Sub-commands:
- health: catalog health counters
- self-test: scripted-profile regression check (exit 1 on failure)
- match: ranked matches for a profile
- detail: one grant evaluated against a profile (exit 1 when not found)
- watch: keep the catalog refreshed on schedule until interrupted

Results are printed to stdout as JSON; logs go to stderr.
"""

import argparse
import logging
import sys
import threading
from typing import Optional

from pydantic import BaseModel, ValidationError

from .catalog import CatalogRefresher
from .config import Settings, build_provider, build_refresher, load_config
from .matching import MatchingEngine
from .models import AcresBand, ApplicantProfile, FarmType, FundingGoal, OperatorType
from .scorer import load_weights

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger().setLevel(level)


def build_engine(settings: Settings) -> MatchingEngine:
    """Wire provider and scoring weights from settings."""
    return MatchingEngine(build_provider(settings), weights=load_weights(settings.weights_path))


def _add_profile_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--state", required=True, help="2-letter state code")
    parser.add_argument("--county")
    parser.add_argument(
        "--farm-type",
        required=True,
        choices=[farm_type.value for farm_type in FarmType],
    )
    parser.add_argument(
        "--operator-type",
        default=OperatorType.INDIVIDUAL.value,
        choices=[operator_type.value for operator_type in OperatorType],
    )
    parser.add_argument("--acres", choices=[band.value for band in AcresBand])
    parser.add_argument("--employees", type=int, default=1)
    parser.add_argument(
        "--goal",
        dest="goals",
        action="append",
        default=[],
        choices=[goal.value for goal in FundingGoal],
        help="Funding goal (repeatable)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grant-matching",
        description="Deterministic grant matching for small farms",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("health", help="Print catalog health counters")
    subparsers.add_parser("self-test", help="Run the scripted-profile self-test")

    match_parser = subparsers.add_parser("match", help="Find grants for a profile")
    _add_profile_arguments(match_parser)
    match_parser.add_argument("--limit", type=int, default=20)
    match_parser.add_argument("--min-score", type=int, default=None)

    detail_parser = subparsers.add_parser("detail", help="Evaluate one grant for a profile")
    detail_parser.add_argument("grant_id")
    _add_profile_arguments(detail_parser)

    subparsers.add_parser("watch", help="Refresh the catalog on schedule until interrupted")

    return parser


def profile_from_args(args: argparse.Namespace) -> ApplicantProfile:
    return ApplicantProfile(
        state=args.state,
        county=args.county,
        farm_type=FarmType(args.farm_type),
        acres_band=AcresBand(args.acres) if args.acres else None,
        operator_type=OperatorType(args.operator_type),
        employee_count=args.employees,
        goals=tuple(FundingGoal(goal) for goal in args.goals),
    )


def _print_json(model: BaseModel) -> None:
    print(model.model_dump_json(indent=2))


def watch(refresher: CatalogRefresher, stop: Optional[threading.Event] = None) -> None:
    """Run the scheduled catalog refresh until interrupted or ``stop`` is set."""
    stop = stop or threading.Event()
    refresher.start()
    try:
        while not stop.wait(1):
            pass
    except (KeyboardInterrupt, SystemExit):
        logger.info("Shutting down catalog refresher...")
    finally:
        refresher.shutdown()


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_config()
    except ValueError as exc:
        configure_logging()
        logger.error("Configuration error: %s", exc)
        return 2

    configure_logging(settings.log_level)
    engine = build_engine(settings)

    if args.command == "health":
        _print_json(engine.get_health())
        return 0

    if args.command == "self-test":
        report = engine.run_self_tests(min_matches=settings.self_test_min_matches)
        _print_json(report)
        return 0 if report.passed else 1

    if args.command == "watch":
        refresher = build_refresher(settings, engine.provider)
        if refresher is None:
            logger.error("Catalog refresh is disabled (GRANT_MATCHING_CATALOG_REFRESH_MINUTES=0)")
            return 2
        _print_json(engine.get_health())
        watch(refresher)
        return 0

    try:
        profile = profile_from_args(args)
    except ValidationError as exc:
        logger.error("Invalid profile: %s", exc)
        return 2

    if args.command == "match":
        _print_json(engine.find_matches(profile, limit=args.limit, min_score=args.min_score))
        return 0

    detail = engine.get_detail_for_profile(args.grant_id, profile)
    if detail is None:
        print(f"Grant {args.grant_id!r} not found", file=sys.stderr)
        return 1
    _print_json(detail)
    return 0


if __name__ == "__main__":
    sys.exit(main())
