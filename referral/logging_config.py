"""Logging for the tracker CLI and setup scripts.

Referral failures never raise to the caller; they are logged here instead, so
the rotating log file is the place to look when a scan returns nothing.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Any

# httpx logs every request at INFO; keep them out of the log unless asked.
HTTP_LOGGERS = ("httpx", "httpcore")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _level(name: Any, default: int) -> int:
    return getattr(logging, str(name).upper(), default)


def _rotating_file(project_root: Path, cfg: dict[str, Any]) -> logging.Handler:
    log_path = project_root / cfg.get("file", "logs/referral.log")
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=int(cfg.get("max_bytes", 10 * 1024 * 1024)),
        backupCount=int(cfg.get("backup_count", 3)),
        encoding="utf-8",
    )


def setup_logging(project_root: Path, settings: dict[str, Any]) -> None:
    """Route the root logger to logs/referral.log, optionally also to stderr.

    Reads the `logging` section: file, level, log_to_console, max_bytes,
    backup_count and http_level (applied to the httpx/httpcore loggers).
    """
    cfg = settings.get("logging", {})
    level = _level(cfg.get("level", "INFO"), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root = logging.getLogger()
    root.setLevel(level)
    for h in root.handlers[:]:
        root.removeHandler(h)

    handlers = [_rotating_file(project_root, cfg)]
    if cfg.get("log_to_console", False):
        handlers.append(logging.StreamHandler())
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)
        root.addHandler(h)

    http_level = _level(cfg.get("http_level", "WARNING"), logging.WARNING)
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
