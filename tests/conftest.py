"""
Shared pytest fixtures for Extracta tests.
"""

from typing import Callable

import pytest
from extracta.extractor import LxmlDocument, SourceUrl

LOREM = "Lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod tempor "


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


@pytest.fixture
def make_text() -> Callable[[int], str]:
    """Build prose of an exact length with no surrounding whitespace."""

    def _make_text(length: int) -> str:
        text = (LOREM * (length // len(LOREM) + 1))[:length]
        if text.endswith(" "):
            text = text[:-1] + "x"
        return text

    return _make_text


@pytest.fixture
def parse() -> Callable[[str], LxmlDocument]:
    """Parse markup into a document."""
    return LxmlDocument.from_markup


@pytest.fixture
def example_url() -> SourceUrl:
    return SourceUrl.parse("http://example.com/articles/1")
