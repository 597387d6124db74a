"""Logging utilities.

Inside a GitHub Actions run (GITHUB_ACTIONS=true) warnings and errors are
emitted as workflow commands so they show up as annotations on the run.
"""

import logging
import os
import sys
from typing import Optional


LOGGER_NAME = "title_agent"

_WORKFLOW_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


class WorkflowCommandFormatter(logging.Formatter):
    """Prefix records with `::warning::` style workflow commands."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _WORKFLOW_COMMANDS.get(record.levelno)
        if command is None:
            return message
        # Workflow commands are single-line; encode newlines as documented
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"::{command}::{escaped}"


def running_in_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


def setup_logging(
    level: int = logging.INFO,
    format_str: Optional[str] = None,
    workflow_commands: Optional[bool] = None
) -> logging.Logger:
    """
    Setup logging for the title agent.

    Args:
        level: Logging level (default: INFO)
        format_str: Custom format string
        workflow_commands: Emit GitHub workflow commands (default: auto-detect)

    Returns:
        Configured logger
    """
    if workflow_commands is None:
        workflow_commands = running_in_actions()

    if format_str is None:
        format_str = "%(message)s" if workflow_commands else "[%(asctime)s] %(levelname)s - %(message)s"

    handler = logging.StreamHandler(sys.stdout)
    if workflow_commands:
        handler.setFormatter(WorkflowCommandFormatter(format_str))
    else:
        handler.setFormatter(logging.Formatter(format_str))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers = [handler]
    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
