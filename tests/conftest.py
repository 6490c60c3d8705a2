import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; undo it after every test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def clean_bf_environment(monkeypatch):
    for key in ("BF_TAPE_SIZE", "BF_STEP_LIMIT", "BF_DEBUG", "BF_PROMPT", "BF_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
