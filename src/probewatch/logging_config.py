# probewatch/logging_config.py
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """
    Configure logging through Rich so records render above the live status.
    Pass the console used by the terminal to share its live display.
    If log_file is provided, also log to that file.
    """
    # Get root logger
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Clear any existing handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
    )
    console_handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    logger.addHandler(console_handler)

    # Optionally create file handler
    if log_file:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.info(f"Logging to file: {log_file}")

    def handle_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.error("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = handle_exception

    return logger
