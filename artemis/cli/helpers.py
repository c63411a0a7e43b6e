"""Shared helper utilities for the CLI."""

from __future__ import annotations

import json
import logging

from artemis.cli.options import LogFormat


class _JSONLogFormatter(logging.Formatter):
    """Compact JSON formatter for machine-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=True)


def _configure_logging(
    level: str = "INFO",
    log_format: str = LogFormat.READABLE.value,
    debug: bool = False,
) -> None:
    """Configure process-wide logging.

    Args:
        level: Root log level name.
        log_format: ``readable`` or ``json``.
        debug: Raise the ``artemis`` loggers to DEBUG regardless of ``level``.
    """
    normalized_level = level.upper()
    resolved_level = getattr(logging, normalized_level, logging.INFO)
    root = logging.getLogger()
    root.handlers = [h for h in root.handlers if not getattr(h, "_artemis_handler", False)]

    handler = logging.StreamHandler()
    handler._artemis_handler = True  # type: ignore[attr-defined]
    if log_format == LogFormat.JSON.value:
        formatter: logging.Formatter = _JSONLogFormatter(datefmt="%Y-%m-%dT%H:%M:%S")
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | ARTEMIS-IA: %(message)s",
            datefmt="%H:%M:%S",
        )
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(resolved_level)

    # Third-party loggers stay at the root level.
    logging.getLogger("artemis").setLevel(logging.DEBUG if debug else logging.NOTSET)
