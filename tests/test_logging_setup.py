from __future__ import annotations

import logging

import pytest

from task_manager.logging_setup import setup_logging


@pytest.fixture()
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_installs_single_handler(restore_root):
    setup_logging("debug")
    setup_logging("debug")

    assert restore_root.level == logging.DEBUG
    assert len(restore_root.handlers) == 1
    assert logging.getLogger("httpx").level == logging.WARNING


def test_unknown_level_name_falls_back_to_info(restore_root):
    setup_logging("chatty")
    assert restore_root.level == logging.INFO
