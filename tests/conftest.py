"""Pytest configuration and shared fixtures for the mdcallouts test suite."""

from pathlib import Path

import pytest

from mdcallouts.ast import BlockQuote, Document, LinkReference, Paragraph, Text
from mdcallouts.transforms import transform_registry


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def clean_registry():
    """Give a test a freshly initialized transform registry and restore it afterwards."""
    transform_registry.clear()
    yield transform_registry
    transform_registry.clear()


@pytest.fixture
def tip_quote() -> BlockQuote:
    """Block quote as parsed from ``> [!TIP]`` followed by ``> Use shortcuts.``."""
    return BlockQuote(
        children=[
            Paragraph(
                content=[
                    LinkReference(identifier="!tip", label="!TIP"),
                    Text(content="\nUse shortcuts."),
                ]
            )
        ]
    )


@pytest.fixture
def tip_document(tip_quote) -> Document:
    """Document holding only the tip block quote."""
    return Document(children=[tip_quote])


@pytest.fixture
def markdown_file(tmp_path: Path) -> Path:
    """Markdown file with a heading, a callout and a plain quote."""
    path = tmp_path / "guide.md"
    path.write_text(
        "# Guide\n\n> [!WARNING]\n> Back up first.\n\n> Just a quote.\n",
        encoding="utf-8",
    )
    return path
