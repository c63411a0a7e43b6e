"""CLI option models and parser helpers."""

from __future__ import annotations

import argparse
from enum import StrEnum


class LogFormat(StrEnum):
    """CLI log formatter mode."""

    READABLE = "readable"
    JSON = "json"


def build_arg_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="artemis",
        description="Tile-world gathering and painting agent",
    )
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run the agent inside a simulation")
    run_parser.add_argument(
        "--factory",
        type=str,
        default=None,
        help="Simulation factory as 'module:callable' (overrides simulation.factory)",
    )
    run_parser.add_argument("--config", type=str, default=None, help="Path to a YAML config file")
    run_parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help="Dotenv file with ARTEMIS_* overrides (default: .env beside --config, then ./.env)",
    )
    run_parser.add_argument("--max-ticks", type=int, default=None, help="Max simulation ticks")
    run_parser.add_argument("--seed", type=int, default=None, help="Seed for random draws")
    run_parser.add_argument("--debug", action="store_true", help="Log agent internals")
    run_parser.add_argument(
        "--log-format",
        type=str,
        default=None,
        choices=[fmt.value for fmt in LogFormat],
        help="Log output format (defaults to logging.format)",
    )
    return parser
