import logging
import os
import sys
from typing import Any, Literal

import structlog

LogFormat = Literal["json", "plain", "auto"]


def _should_use_json_format() -> bool:
    """Determine if JSON format should be used based on environment."""
    ci_vars = ["CI", "CONTINUOUS_INTEGRATION", "GITHUB_ACTIONS", "JENKINS_URL"]
    if any(os.environ.get(var) for var in ci_vars):
        return True

    # Logs share stderr with error messages; only a TTY gets plain output
    return bool(not sys.stderr.isatty())


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # Resolve sys.stderr per call so redirected streams are honoured
    return structlog.PrintLogger(file=sys.stderr)


def setup_logging(format_type: LogFormat = "auto", level: str = "info", no_color: bool = False) -> None:
    """
    Setup structured logging with format control.

    Logs always go to stderr so that ``litweb list`` and ``litweb expand``
    can be piped.

    Args:
        format_type: "json" for JSON output, "plain" for human-readable,
                "auto" to auto-detect based on TTY/CI.
        level: Minimum level name (debug, info, warning, error).
        no_color: Disable ANSI colors in plain output.
    """
    use_json = format_type == "json" or (format_type == "auto" and _should_use_json_format())

    if use_json:
        processors: list[Any] = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=not no_color and sys.stderr.isatty()),
        ]

    min_level = logging.getLevelName(level.upper())
    if not isinstance(min_level, int):
        raise ValueError(f"Unknown log level: {level}")

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


log = structlog.get_logger()
