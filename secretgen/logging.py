from rich.console import Console
from rich.logging import RichHandler
import logging

_console = Console()
_err_console = Console(stderr=True)


def get_logger(name: str = "secretgen") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = RichHandler(console=_err_console, show_time=False, show_level=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
        logger.propagate = False
    return logger


def set_level(level: int) -> None:
    """Apply `level` to every secretgen logger created so far."""
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("secretgen") and isinstance(logger, logging.Logger):
            logger.setLevel(level)


def console() -> Console:
    return _console


def err_console() -> Console:
    return _err_console
