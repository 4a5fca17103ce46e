"""Logging for medidoc runs: JSON lines on disk, plain text on the console.

Call setup_logging() once at process start, before anything else logs.
Module code throughout the project uses logging.getLogger(__name__), so
every record's ``component`` field names the medidoc module that wrote it.
"""

import logging
import logging.handlers
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

from medidoc import __version__

# Third-party loggers that are chatty at DEBUG/INFO during extraction and
# summarization.  httpx logs one INFO line per request (worker probes
# included); PIL logs every PNG chunk it reads while OCR opens an image.
THIRD_PARTY_LEVELS: dict[str, int] = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "PIL": logging.INFO,
    "pytesseract": logging.WARNING,
}


def _json_file_handler(path: Path, max_bytes: int, backup_count: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=str(path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(
        JsonFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "component",
            },
            static_fields={"app": "medidoc", "version": __version__},
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def setup_logging(
    log_dir: str = "logs",
    log_level_file: int = logging.DEBUG,
    log_level_console: int = logging.INFO,
    max_bytes: int = 10_485_760,  # 10MB
    backup_count: int = 5,
    log_file_name: str = "medidoc.log",
) -> None:
    """Route all medidoc logging to a rotating JSON file and stderr.

    Replaces any handlers already on the root logger, so calling this twice
    (tests, the smoke script) does not duplicate output.  Levels for the
    libraries in THIRD_PARTY_LEVELS are raised so document text pipelines
    do not drown the log in transport and image-decoder chatter.

    Args:
        log_dir: Directory for log files; created when missing.
        log_level_file: Level for the JSON file handler.
        log_level_console: Level for the console handler.
        max_bytes: Size per log file before rotation.
        backup_count: Rotated files to keep.
        log_file_name: File name inside *log_dir*.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    file_handler = _json_file_handler(log_path / log_file_name, max_bytes, backup_count)
    file_handler.setLevel(log_level_file)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level_console)
    console_handler.setFormatter(
        logging.Formatter("%(levelname)s %(name)s: %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    for name, level in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(level)
