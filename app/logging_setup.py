"""Logging setup: console output plus a rotating file inside LOG_DIR."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

_LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_initialized = False


def setup_logging(log_dir, level='INFO', file_name='catroweb.log', testing=False):
    """
    Configure the root logger once.

    Args:
        log_dir: Directory for the rotating log file (served by the admin log download)
        level: Log level name
        file_name: Log file name inside log_dir
        testing: Skip the file handler so tests do not write into log_dir
    """
    global _initialized
    if _initialized:
        return

    formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    root.addHandler(stream)

    if not testing:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path / file_name,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8',
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    _initialized = True
