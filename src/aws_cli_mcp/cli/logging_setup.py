"""Diagnostic logging for the server process.

Records go to stderr through Rich when it is installed, otherwise
through a plain :class:`logging.StreamHandler`.  Every handler carries
a :class:`RedactingFilter`.  The process environment is never logged.
"""

from __future__ import annotations

import logging
import re
import sys

from aws_cli_mcp.cli.console import get_rich_console
from aws_cli_mcp.exceptions import EnvironmentError

ROOT_LOGGER: str = "aws_cli_mcp"
REDACTED: str = "****"

_SECRET_PATTERNS: tuple[re.Pattern[str], ...] = (
    # Access key ids (long-term and temporary).
    re.compile(r"\b(?:AKIA|ASIA)[A-Z0-9]{16}\b"),
    # key=value / key: value pairs for secrets and tokens.
    re.compile(
        r"(?i)(aws_secret_access_key|aws_session_token|secretaccesskey|sessiontoken"
        r"|secret[_-]?key|session[_-]?token|password)(\"?\s*[:=]\s*\"?)([^\s\"',]+)",
    ),
)


def redact(text: str) -> str:
    """Mask AWS credentials that appear in *text*."""
    text = _SECRET_PATTERNS[0].sub(REDACTED, text)
    return _SECRET_PATTERNS[1].sub(lambda m: f"{m.group(1)}{m.group(2)}{REDACTED}", text)


class RedactingFilter(logging.Filter):
    """Rewrite each record's message with credentials masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


def _build_handler() -> logging.Handler:
    try:
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            console=get_rich_console(),
            show_path=False,
            rich_tracebacks=True,
        )
    except (ModuleNotFoundError, EnvironmentError):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"),
        )
    handler.addFilter(RedactingFilter())
    return handler


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling this again replaces the previous handler.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(_build_handler())
    logger.setLevel(level)
    logger.propagate = False
    return logger
