"""Logging setup shared by the CLI and the API server."""

import logging
from typing import Union

from rich.logging import RichHandler

_MANAGED_HANDLER_FLAG = "_gemini_relay_managed_handler"


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Install a single rich handler on the root logger.

    Calling this again replaces the handler installed previously instead of
    stacking a second one.

    Args:
        level: Logging level name or number
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _MANAGED_HANDLER_FLAG, False):
            root.removeHandler(handler)
            handler.close()

    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    setattr(handler, _MANAGED_HANDLER_FLAG, True)

    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request URL at INFO, which includes the API key
    logging.getLogger("httpx").setLevel(logging.WARNING)
