import os

import pytest


@pytest.fixture(scope="session")
def qapp():
    # must be set before the first QApplication exists
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
