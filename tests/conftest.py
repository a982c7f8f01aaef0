from logging import getLogger

import pytest

from ormgen.config import Config, loader
from ormgen.ui.virtual import VirtualUI


@pytest.fixture(autouse=True)
def default_config():
    """
    Reset the global configuration to the built-in defaults.

    The CLI helpers modify the loader's configuration in place, so each
    test starts from a fresh copy.
    """
    loader.config = Config()
    loader.config_path = None
    yield loader.config


@pytest.fixture
def ui():
    """
    UI that records messages instead of printing them.
    """
    return VirtualUI()


@pytest.fixture(autouse=True)
def reset_logging():
    """
    Remove log handlers installed during a test.

    Handlers set up by `ormgen.log.setup()` may point at a captured
    stream that is closed once the test finishes.
    """
    yield
    logger = getLogger("ormgen")
    while logger.handlers:
        handler = logger.handlers[0]
        logger.removeHandler(handler)
        handler.close()
