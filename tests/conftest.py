"""
Pytest configuration for pagequill
"""

import pytest
import logging
import sys
from pathlib import Path

from pagequill.config import PageTemplate
from pagequill.model import Box


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    # Clear all existing handlers
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Set up console-only logging for tests
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests

    formatter = logging.Formatter(
        '%(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    # Cleanup after test
    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


def make_template(content_height, header_height=20.0, footer_height=20.0, **overrides):
    """Template whose pages lock exactly ``content_height`` points of content."""
    return PageTemplate(
        width=overrides.pop("width", 400.0),
        height=content_height + header_height + footer_height,
        header_height=header_height,
        footer_height=footer_height,
        **overrides,
    )


def paragraph(text, **attributes):
    return Box("p", dict(attributes), children=[Box.text_node(text)])


def source(key, *children):
    return Box("paginate-source", {"data-key": key}, children=list(children))


def target(key):
    return Box("paginate-target", {"data-key": key})


@pytest.fixture
def acme_document():
    """Header source with a page number placeholder followed by 50 paragraphs."""
    header = source("header", Box.text_node("Acme Corp "), target("pageNumber"))
    paragraphs = [paragraph(f"Paragraph {index}") for index in range(1, 51)]
    return Box("div", children=[header] + paragraphs)
