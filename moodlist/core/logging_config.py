import logging
import sys
from typing import Union

# Third-party loggers that log every HTTP request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure root logging for the service and the CLI.

    Records go to stdout as "time [LEVEL] logger - message". A second call
    only changes the level, so uvicorn's own handlers are never doubled.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if root.handlers:
        root.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(handler)
    root.setLevel(level)
