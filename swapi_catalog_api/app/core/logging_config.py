"""
Logging setup for the catalog API.

Services log record lifecycle events (``Created Planet 3``, ``Linked
film 4 to person 1``) at INFO and link no-ops at DEBUG; the HTTP
boundary logs unexpected failures with their traceback.  All of it
goes through the root logger configured here: to stderr always, and
to ``settings.log_file`` when ``LOG_FILE`` is set.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach the catalog's handlers to the root logger.

    Does nothing if the root logger already has handlers, so building
    the app more than once per process (as the test suite does) keeps a
    single set.  ``level`` is a level name such as ``"DEBUG"``; unknown
    names fall back to INFO.  A ``logfile`` whose directory is missing
    gets the directory created.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
