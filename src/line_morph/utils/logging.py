"""Logging setup for line_morph.

Library modules only ever call get_logger(__name__). The CLI calls
setup_logger() to attach a colored console handler; each pipeline run wraps
itself in session_log() to add a session file that records everything down
to DEBUG while the run lasts.
"""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_DATEFMT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name with ANSI codes."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)

        # Restore afterwards: the record is shared with the file handler
        plain = record.levelname
        record.levelname = f"{color}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


def _console_handler(level: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
    return handler


def setup_logger(
    name: str = 'line_morph',
    verbose: bool = True,
    log_file: Optional[Path] = None,
    log_level: str = "INFO"
) -> logging.Logger:
    """
    Attach console and file handlers to a logger, replacing any it had.

    Args:
        name: Logger name; 'line_morph' covers every module logger
        verbose: Attach the colored console handler
        log_file: Session log path (always written at DEBUG)
        log_level: Console level: "DEBUG", "INFO", "WARNING" or "ERROR"

    Returns:
        The configured logger

    Example:
        >>> logger = setup_logger(log_file=Path('results/run/session.log'))
        >>> logger.info("Rendering 11 frames")
        INFO: Rendering 11 frames
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        logger.addHandler(_file_handler(Path(log_file)))
    if verbose:
        logger.addHandler(_console_handler(log_level))

    return logger


def get_logger(name: str = 'line_morph') -> logging.Logger:
    """Logger for a module; pass __name__ so it sits under 'line_morph'."""
    return logging.getLogger(name)


@contextmanager
def session_log(
    log_file: Path,
    verbose: bool = False,
    log_level: str = "INFO",
    name: str = 'line_morph'
) -> Iterator[logging.Logger]:
    """
    Record everything logged under a logger to a file for one run.

    The file handler is attached to the package logger, so warnings from
    any module (dimension matching, ratio clamping, failed saves) land in
    the session log. A console handler is added only when verbose is set
    and nothing has configured the logger yet; a CLI that called
    setup_logger() keeps its own console output. Both handlers are removed
    and closed, and the logger level restored, on exit.

    Args:
        log_file: Session log path (written at DEBUG)
        verbose: Print to the console if no handler is configured
        log_level: Console level for that fallback console handler
        name: Logger to attach to

    Yields:
        The logger the handlers were attached to

    Example:
        >>> with session_log(run_dir / 'session.log') as logger:
        ...     logger.info("Rendering 11 frames")
    """
    logger = logging.getLogger(name)
    handlers = [_file_handler(Path(log_file))]
    if verbose and not logger.handlers:
        handlers.append(_console_handler(log_level))

    previous_level = logger.level
    logger.setLevel(logging.DEBUG)
    for handler in handlers:
        logger.addHandler(handler)

    try:
        yield logger
    finally:
        for handler in handlers:
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(previous_level)
