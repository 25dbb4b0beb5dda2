"""Structured logging of conversions (timestamp, source, sizes, timing)."""

import logging
import logging.handlers
from pathlib import Path

LOG_FILE_PATH = Path(__file__).parent.parent.parent / "logs/converter.log"
_LOG_LEVEL = logging.INFO

LOG_FORMAT = (
    "level=%(levelname)s | time=%(asctime)s | process=%(process)d | "
    "thread=%(thread)d | module=%(module)s | funcName=%(funcName)s | "
    "lineno=%(lineno)d | message=%(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_file: Path = LOG_FILE_PATH,
    level: int = _LOG_LEVEL,
) -> logging.Handler:
    """Configure the root logger to write to a rotating log file.

    Handlers installed by a previous call are replaced.

    Args:
        log_file (Path): The file to write log records to.
        level (int): The logging level of the root logger.

    Returns:
        logging.Handler: The installed file handler.

    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.close()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)
    return file_handler


def log(
    time_stamp: str,
    source: str,
    input_chars: int,
    layers: int,
    execution_time_ms: float,
) -> None:
    """Log the details of a conversion using the configured
    logging system.

    Args:
        time_stamp (str): The timestamp of the conversion.
        source (str): Where the converted text came from.
        input_chars (int): The number of characters converted.
        layers (int): The number of dictionary layers applied.
        execution_time_ms (float): The execution time in milliseconds.

    """
    logging.info(
        "Timestamp: %s, Source: %s, Characters: %d, Layers: %d, "
        "Execution Time: %.2f ms",
        time_stamp,
        source,
        input_chars,
        layers,
        execution_time_ms,
    )
