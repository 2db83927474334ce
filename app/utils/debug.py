"""
Step logging helper shared by routes and services.
"""
import logging
from typing import Any

from ..core.logger import get_logger

logger = get_logger("og-service.steps")

_LEVELS = {
    "input": logging.DEBUG,
    "output": logging.DEBUG,
    "error": logging.ERROR,
}


def print_step(step: str, data: Any = None, kind: str = "input") -> None:
    """
    Log a named pipeline step.

    Args:
        step: Human readable step name
        data: Payload describing the step (dict, str, ...)
        kind: One of "input", "output" or "error"
    """
    level = _LEVELS.get(kind, logging.INFO)
    if not logger.isEnabledFor(level):
        return
    if isinstance(data, dict):
        details = ", ".join(f"{key}={value!r}" for key, value in data.items())
    else:
        details = "" if data is None else str(data)
    logger.log(level, "[%s] %s: %s", kind, step, details)
