"""Page model for Logseq outline pages.

This package provides the Page data model and the conversions between the
on-disk outline format and (content, indent level) entries.
"""

from .models import ContentLine, Page
from .outline import (
    from_outline_text,
    parse_page,
    render_page,
    to_outline_text,
)
from .errors import PageModelError, PageParseError

__all__ = [
    'ContentLine',
    'Page',
    'from_outline_text',
    'to_outline_text',
    'render_page',
    'parse_page',
    'PageModelError',
    'PageParseError',
]
