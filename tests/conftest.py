"""Shared fixtures: a headless Qt application and candidate builders."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtGui import QColor, QFont, QTextCharFormat
from PySide6.QtWidgets import QApplication

from menufilter.menu.item import Candidate


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def highlight_format() -> QTextCharFormat:
    fmt = QTextCharFormat()
    fmt.setBackground(QColor("#80ffff00"))
    fmt.setFontUnderline(True)
    return fmt


def _make_candidate(
    title: str | None,
    *,
    separator: bool = False,
    alternates: dict[str, Candidate] | None = None,
    attributed_title=None,
) -> Candidate:
    return Candidate(
        title=title,
        attributed_title=attributed_title,
        is_separator=separator,
        font=QFont(),
        alternates=alternates or {},
    )


@pytest.fixture
def make_candidate():
    """Build a Candidate snapshot directly, without a Menu"""
    return _make_candidate

