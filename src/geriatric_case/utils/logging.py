# ============================================================================
# src/geriatric_case/utils/logging.py
# ============================================================================
"""
Logging setup for the CLI, API and UI.

Log lines go to stderr (stdout belongs to CLI output) and optionally to a
file. Level, file and JSON mode default to LoggingSettings, so the API
and UI pick them up from the environment.
"""

import functools
import json
import logging
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..config import logging_settings

# PDF and image libraries log every page and chunk at DEBUG/INFO
NOISY_LOGGERS = ('pdfminer', 'pdfplumber', 'PIL', 'multipart')


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_json: Optional[bool] = None
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Optional file to append log lines to
        format_json: One JSON object per line instead of plain text
    """
    if level is None:
        level = logging_settings.LOG_LEVEL
    if log_file is None:
        log_file = logging_settings.LOG_FILE
    if format_json is None:
        format_json = logging_settings.LOG_JSON

    if format_json:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers = [console_handler]

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        handlers=handlers,
        force=True
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record; timings from log_performance are kept."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'function': record.funcName,
            'line': record.lineno
        }

        for key in ('operation', 'duration'):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_performance(logger: logging.Logger, operation: str):
    """
    Decorator logging how long an import or export step took.

    Args:
        logger: Logger of the decorated module
        operation: Label such as "OCR" or "PPTX export"
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = round(time.perf_counter() - start, 3)
                logger.error(
                    f"{operation} failed after {duration:.3f}s: {e}",
                    extra={'operation': operation, 'duration': duration},
                )
                raise

            duration = round(time.perf_counter() - start, 3)
            logger.info(
                f"{operation} completed in {duration:.3f}s",
                extra={'operation': operation, 'duration': duration},
            )
            return result

        return wrapper
    return decorator
