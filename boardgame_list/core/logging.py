from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname).3s] [%(process)d #%(thread)d] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

_HANDLER_NAME = "boardgame_list.console"


def configure_logging(level: str | int = "INFO") -> None:
    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper() or "INFO")
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)
    if any(handler.get_name() == _HANDLER_NAME for handler in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root.addHandler(handler)
