"""Typed exceptions for page model parsing."""

from svlmd.errors import SvlmdError


class PageModelError(SvlmdError):
    """Base exception for all page model errors."""
    pass


class PageParseError(PageModelError):
    """Raised when page text cannot be parsed into a Page."""

    def __init__(self, title: str, message: str):
        super().__init__(f"Failed to parse page '{title}': {message}")
        self.title = title
        self.message = message
