import os
import sys
import time

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from PySide6.QtCore import QCoreApplication

from clearview.config import ConfigManager


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


def wait_until(app, predicate, timeout=5.0):
    """Pump the Qt event queue until predicate() is true or the timeout expires."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        app.processEvents()
        if predicate():
            return True
        time.sleep(0.005)
    app.processEvents()
    return predicate()


def make_tree(base, paths):
    """Create files (and their parent folders) from a list of relative paths.

    A path ending in '/' creates an empty folder.
    """
    for rel in paths:
        p = base / rel
        if rel.endswith('/'):
            p.mkdir(parents=True, exist_ok=True)
        else:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text('x', encoding='utf-8')
    return base


@pytest.fixture
def config(tmp_path):
    cfg = ConfigManager(tmp_path / 'data')
    return cfg
