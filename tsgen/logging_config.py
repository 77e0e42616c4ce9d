"""Logging setup for tsgen.

All modules log through children of the ``tsgen`` logger obtained with
:func:`get_logger`. Nothing is emitted until :func:`setup_logging` installs
a handler (the CLI does this; library users configure logging themselves).
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "tsgen"

_root_logger = logging.getLogger(ROOT_LOGGER_NAME)
_root_logger.addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``tsgen`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: int | str = logging.WARNING, use_rich: bool = True) -> None:
    """Configure the ``tsgen`` logger.

    Args:
        level: Logging level name or number.
        use_rich: Render records with rich on stderr instead of plain text.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    for handler in list(_root_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            _root_logger.removeHandler(handler)

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    _root_logger.addHandler(handler)
    _root_logger.setLevel(level)
