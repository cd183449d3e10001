# utils/logger.py

# Every module logs under the "link_catalog" tree.
# Only the tree's root carries a handler; module loggers propagate to it,
# so -v flips the whole tree with one setLevel call.

import logging
import sys

ROOT_LOGGER = "link_catalog"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        root.propagate = False
    return root


def setup_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Logger for `name`, placed under link_catalog (e.g. "http" -> "link_catalog.http").
    """
    root = _configure_root()
    if name == ROOT_LOGGER:
        return root
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def set_verbosity(verbose: int) -> None:
    """DEBUG for the whole tree when -v is given, INFO otherwise."""
    _configure_root().setLevel(logging.DEBUG if verbose > 0 else logging.INFO)
