"""Main entry point for the Accountability Scoring & Streak Engine."""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from accountability.engine.late_edit import can_edit_date
from accountability.engine.reports import REPORT_KINDS, build_report
from accountability.engine.stats import build_stats_snapshot
from accountability.errors import AccountabilityError
from accountability.simulation.generator import HistoryGenerator
from accountability.utils.config import get_default_config, get_setting, load_config
from accountability.utils.dataset import dump_dataset, load_dataset
from accountability.utils.datetime_utils import parse_date
from accountability.utils.logging_setup import configure_logging

logger = logging.getLogger("accountability.cli")


def _load_config(config_path: str) -> dict:
    if config_path and Path(config_path).exists():
        return load_config(config_path)
    return get_default_config()


def _as_of(value: str) -> date:
    return parse_date(value) if value else date.today()


def run_stats(args, config: dict):
    """Print the dashboard stats snapshot as JSON."""
    dataset = load_dataset(args.data)
    as_of = _as_of(args.as_of)

    snapshot = build_stats_snapshot(
        dataset.tasks, dataset.completions, dataset.goals, as_of, config
    )
    print(json.dumps(snapshot.to_dict(), indent=2))
    return snapshot


def run_report(args, config: dict):
    """Print a daily, weekly or monthly report."""
    dataset = load_dataset(args.data)
    as_of = _as_of(args.as_of)

    report = build_report(
        dataset.tasks, dataset.completions, dataset.goals, as_of, args.period, config
    )

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, default=str))
    else:
        print(report.to_human_readable())
    return report


def run_generate(args, config: dict):
    """Write a deterministic sample dataset."""
    generator = HistoryGenerator(seed=args.seed, config=config)
    dataset = generator.generate_history(_as_of(args.as_of), history_days=args.days)

    path = dump_dataset(dataset, args.output)
    print(f"Generated {len(dataset.goals)} goals, {len(dataset.tasks)} tasks, "
          f"{len(dataset.completions)} completions")
    print(f"Dataset saved to: {path}")
    return dataset


def run_can_edit(args, config: dict):
    """Check whether a date may still be logged."""
    grace_days = get_setting(config, 'late_logging', 'grace_days')
    result = can_edit_date(parse_date(args.date), _as_of(args.as_of), grace_days)
    print(json.dumps(result.to_dict()))
    return result


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Accountability Scoring & Streak Engine"
    )
    parser.add_argument(
        'command',
        choices=['stats', 'report', 'generate', 'can-edit'],
        help='Command to run'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '--data',
        type=str,
        default='results/dataset.json',
        help='Dataset file with tasks, completions and goals (default: results/dataset.json)'
    )
    parser.add_argument(
        '--as-of',
        type=str,
        default=None,
        help='Date to compute for, YYYY-MM-DD (default: today)'
    )
    parser.add_argument(
        '--period',
        type=str,
        choices=list(REPORT_KINDS),
        default='daily',
        help='Report period (default: daily)'
    )
    parser.add_argument('--json', action='store_true', help='Print reports as JSON')
    parser.add_argument('--date', type=str, help='Date to check for can-edit, YYYY-MM-DD')
    parser.add_argument('--seed', type=int, default=42, help='Generator seed (default: 42)')
    parser.add_argument('--days', type=int, default=None, help='Days of history to generate')
    parser.add_argument(
        '--output',
        type=str,
        default='results/dataset.json',
        help='Where generate writes the dataset (default: results/dataset.json)'
    )
    parser.add_argument('--log-level', type=str, default='WARNING')
    parser.add_argument('--log-format', type=str, choices=['pretty', 'json'], default='pretty')

    args = parser.parse_args()
    configure_logging(args.log_level, args.log_format)
    config = _load_config(args.config)

    if args.command == 'can-edit' and not args.date:
        parser.error("can-edit requires --date")

    try:
        if args.command == 'stats':
            run_stats(args, config)
        elif args.command == 'report':
            run_report(args, config)
        elif args.command == 'generate':
            run_generate(args, config)
        elif args.command == 'can-edit':
            run_can_edit(args, config)
    except (AccountabilityError, FileNotFoundError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
