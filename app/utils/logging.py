# app/utils/logging.py
import logging
import sys

from app.utils.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def resolve_level(name: str) -> int:
    #nieznany poziom -> INFO zamiast wywalenia aplikacji przy imporcie
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _configure():
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))

    root = logging.getLogger("app")
    root.addHandler(handler)
    root.setLevel(resolve_level(LOG_LEVEL))
    _configured = True


def get_logger(name: str) -> logging.Logger:
    _configure()
    return logging.getLogger(name)
