"""Custom exceptions for pagequill.

Pagination itself never raises for content problems: oversized boxes,
missing references and reference cycles are logged and recorded instead.
These exceptions cover input, collaborator misuse and output failures.
"""

from typing import Optional


class PagequillError(Exception):
    """Base exception for pagequill errors, carrying optional details."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ParsingError(PagequillError):
    """An HTML source file could not be read."""


class LayoutError(PagequillError):
    """DocumentLayout was asked for pages before prepare() ran."""


class RenderingError(PagequillError):
    """Pages could not be written out, e.g. an empty page list for PDF output."""
