import logging

from utils.logger import ROOT_LOGGER, set_verbosity, setup_logger


def test_module_loggers_share_the_root_handler() -> None:
    root = setup_logger()
    handlers_before = list(root.handlers)

    http_logger = setup_logger("http")
    storage_logger = setup_logger("link_catalog.storage")

    assert http_logger.name == "link_catalog.http"
    assert storage_logger.name == "link_catalog.storage"
    assert http_logger.handlers == [] and http_logger.propagate
    assert root.name == ROOT_LOGGER
    assert len(root.handlers) == 1
    assert root.handlers == handlers_before
    assert not root.propagate


def test_set_verbosity_switches_the_tree() -> None:
    child = setup_logger("history")
    try:
        set_verbosity(1)
        assert child.getEffectiveLevel() == logging.DEBUG
    finally:
        set_verbosity(0)
    assert child.getEffectiveLevel() == logging.INFO
