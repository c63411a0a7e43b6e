"""CLI entrypoint for running Artemis inside a simulation."""

from __future__ import annotations

import argparse
import logging
import sys

from artemis.cli.helpers import _configure_logging
from artemis.cli.options import LogFormat, build_arg_parser
from artemis.config.env import load_environment_file
from artemis.config.loader import Config, load_config
from artemis.core.errors import FatalError
from artemis.core.runner import RunnerConfig, RunSummary, SimulationRunner
from artemis.runtime.assembly import build_agent, resolve_factory

logger = logging.getLogger(__name__)


def _load_run_config(args: argparse.Namespace) -> Config:
    """Load config and apply command-line overrides."""
    config = load_config(args.config)
    updates: dict[str, object] = {}
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.max_ticks is not None:
        updates["max_ticks"] = args.max_ticks
    if args.debug:
        updates["debug"] = True
    if updates:
        config = config.model_copy(
            update={"agent": config.agent.model_copy(update=updates)}
        )
    return config


def run_command(args: argparse.Namespace) -> int:
    """Execute the `run` command."""
    if args.command != "run":
        raise ValueError(f"Unsupported command: {args.command}")

    config = _load_run_config(args)
    _configure_logging(
        level=config.logging.level,
        log_format=args.log_format or config.logging.format,
        debug=config.agent.debug,
    )

    factory_spec = args.factory or config.simulation.factory
    if not factory_spec:
        raise ValueError("No simulation factory given; use --factory or simulation.factory")
    factory = resolve_factory(factory_spec)
    bundle = factory(config)
    logger.info("[BOOT] Simulation ready from %s", factory_spec)

    agent = build_agent(config, bundle)
    runner = SimulationRunner(
        agent,
        bundle.world,
        RunnerConfig(
            max_ticks=config.agent.max_ticks,
            tick_interval_ms=config.agent.tick_interval_ms,
            max_consecutive_errors=config.agent.max_consecutive_errors,
        ),
    )
    summary = runner.run()
    details = agent.metrics.get_metrics().model_dump(include={"transitions", "step_failures"})
    _log_summary(summary, details)
    return 0


def _log_summary(summary: RunSummary, details: dict[str, object]) -> None:
    logger.info(
        "[DONE] %d ticks, final state %s, terminated=%s",
        summary.ticks,
        summary.final_state.value,
        summary.terminated,
    )
    logger.debug("[DONE] %s", details)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint function."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    # Configure a sane bootstrap logger before config loading.
    _configure_logging(level="INFO", log_format=args.log_format or LogFormat.READABLE.value)

    try:
        if args.command == "run":
            load_environment_file(
                args.env_file,
                config_path=args.config,
                strict=args.env_file is not None,
            )
            return run_command(args)
        raise ValueError(f"Unsupported command: {args.command}")
    except FatalError as exc:
        logger.error("[FATAL] Agent halted: %s", exc)
        return 2
    except Exception as exc:
        logger.error("[BOOT] CLI execution failed: %s", exc)
        return 1


__all__ = ["build_arg_parser", "main", "run_command"]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
