"""
Centralized Logging

Architectural Intent:
- One place that configures the `doupdates` logger for the whole process
- Every message is appended to a flat log file and echoed to the console
- Supports configurable log levels via CLI flags (--debug, --quiet)
"""

import json
import logging
import sys
from datetime import datetime, UTC
from pathlib import Path
from typing import Optional

FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(message)s"
CONSOLE_FORMAT = "%(levelname)-7s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    json_format: bool = False,
) -> None:
    """Configure logging for the doupdates application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.)
        log_file: Append-only log file. Parent directories are created.
        json_format: If True, use JSON structured console output.
    """
    root = logging.getLogger("doupdates")
    root.setLevel(level)

    for handler in root.handlers:
        handler.close()
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    if json_format:
        console.setFormatter(JSONFormatter())
    else:
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        root.addHandler(file_handler)
