import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(level: str = "INFO"):
    global _handler

    root = logging.getLogger()
    root.setLevel(level.upper())

    # one handler no matter how many applications are created
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in root.handlers:
        root.addHandler(_handler)
