"""Logging setup for newsfetch.

Fetch diagnostics are a side channel: every failure branch of the pipeline
reports through a logger from ``get_logger``. ``configure_logging`` wires the
root logger once, for the CLI or for library callers that want the same
format.

Environment (read when ``configure_logging`` runs):
  - LOG_LEVEL: level name, default INFO
  - LOG_OUTPUT: stdout | stderr | file | both (stdout + file), default stderr
  - LOG_FILE_PATH: rotating log file, default logs/newsfetch.log
  - LOG_FORMAT: text | json, default text
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Literal

LogOutput = Literal["stdout", "stderr", "file", "both"]
LogFormat = Literal["text", "json"]

DEFAULT_LEVEL = "INFO"
# stdout carries CLI results, so diagnostics default to stderr
DEFAULT_OUTPUT: LogOutput = "stderr"
DEFAULT_FILE_PATH = "logs/newsfetch.log"
DEFAULT_FORMAT: LogFormat = "text"

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

_FORMATS = {
    "text": "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s",
    "json": (
        '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", '
        '"file": "%(filename)s:%(lineno)d", "message": "%(message)s"}'
    ),
}


def is_kubernetes_env() -> bool:
    """Check if the process runs inside a Kubernetes pod."""
    return bool(
        os.environ.get("K8S_CLUSTER")
        or os.environ.get("KUBERNETES_SERVICE_HOST")
        or os.path.exists("/var/run/secrets/kubernetes.io/serviceaccount")
    )


def _resolve_output(output: str | None) -> str:
    if output is not None:
        return output.lower()
    if "LOG_OUTPUT" in os.environ:
        return os.environ["LOG_OUTPUT"].lower()
    # Pod log collectors read stdout
    return "stdout" if is_kubernetes_env() else DEFAULT_OUTPUT


def _build_handlers(output: str, file_path: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if output in ("stdout", "both"):
        handlers.append(logging.StreamHandler(sys.stdout))
    elif output == "stderr":
        handlers.append(logging.StreamHandler(sys.stderr))
    elif output != "file":
        raise ValueError(f"Unknown log output '{output}'. Use stdout, stderr, file or both.")

    if output in ("file", "both"):
        log_dir = os.path.dirname(file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(RotatingFileHandler(file_path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT))
    return handlers


def configure_logging(
    level: str | int | None = None,
    output: LogOutput | None = None,
    file_path: str | None = None,
    log_format: LogFormat | None = None,
) -> None:
    """Configure the root logger.

    Arguments override the matching environment variables. Existing root
    handlers are replaced.

    Raises
    ------
    ValueError
        If ``output`` or ``log_format`` is not one of the known values.
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL", DEFAULT_LEVEL)
    if isinstance(level, str):
        level = level.upper()
    log_format = (log_format or os.environ.get("LOG_FORMAT") or DEFAULT_FORMAT).lower()
    if log_format not in _FORMATS:
        raise ValueError(f"Unknown log format '{log_format}'. Use text or json.")
    file_path = file_path or os.environ.get("LOG_FILE_PATH") or DEFAULT_FILE_PATH

    formatter = logging.Formatter(_FORMATS[log_format])
    handlers = _build_handlers(_resolve_output(output), file_path)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
