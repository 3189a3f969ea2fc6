import os
import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from freshproxy.logging import logger
from freshproxy.settings import reset_settings

from .fixtures import Sequenced


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """
    Drops FRESHPROXY_* variables and cached settings around each test.
    """
    for key in list(os.environ):
        if key.upper().startswith('FRESHPROXY_'):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    monkeypatch.undo()
    reset_settings()


@pytest.fixture
def log_records():
    """
    Collects the records emitted by the freshproxy logger.
    """
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level='TRACE', format='{message}')
    yield records
    logger.remove(handler_id)


@pytest.fixture
def sequenced():
    """
    Returns the `Sequenced` provider factory.
    """
    return Sequenced
