"""Structured logging for Treasure Dungeon."""

import hashlib
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


def hash_fingerprint_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Replace client certificate fingerprints with a short hash."""
    fp = event_dict.pop("fingerprint", None)
    if fp and fp != "unknown":
        event_dict["fingerprint_hash"] = hashlib.sha256(fp.encode()).hexdigest()[:12]
    elif fp:
        event_dict["fingerprint"] = fp
    return event_dict


def _build_processors(json_logs: bool, hash_fingerprints: bool, colors: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(
            fmt="iso" if json_logs else "%Y-%m-%d %H:%M:%S"
        ),
    ]
    if hash_fingerprints:
        processors.append(hash_fingerprint_processor)
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))
    return processors


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    json_logs: bool = False,
    hash_fingerprints: bool = True,
) -> None:
    """Configure structlog for the whole application."""
    output_stream = open(log_file, "a") if log_file else sys.stdout

    structlog.configure(
        processors=_build_processors(
            json_logs, hash_fingerprints, colors=output_stream.isatty()
        ),
        wrapper_class=structlog.make_filtering_bound_logger(
            _LEVELS.get(log_level.upper(), 20)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output_stream),
        cache_logger_on_first_use=True,
    )


def bind_player(fingerprint: str) -> None:
    """Attach the player's fingerprint to every log event of this request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(fingerprint=fingerprint)


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)
