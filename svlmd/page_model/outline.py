"""Outline text parsing and rendering.

Converts between the on-disk Logseq format and the Page model:

    icon:: 🙂
    tags:: Author

    - # Changed Pages
        - ## [[1.2.0]]
            - ### Added
                - [[Some Page]]

Indentation is four spaces per level. Non-empty entries carry a ``- `` bullet;
empty entries render as a bare newline.
"""

import logging
import re
from typing import List, Tuple

from .errors import PageParseError
from .models import ContentLine, Page

logger = logging.getLogger(__name__)

INDENT_UNIT = "    "
BULLET = "- "

# Property lines start at column 0 and never with a bullet
PROPERTY_PATTERN = re.compile(r'^([^\s\-][^:]*?)::\s?(.*)$')


def _count_indentation(line: str) -> int:
    spaces = len(line) - len(line.lstrip(' '))
    return spaces // len(INDENT_UNIT)


def from_outline_text(text: str) -> List[ContentLine]:
    """Parse indented bullet text into (content, indent level) entries.

    A leading ``- `` bullet is stripped once. Blank lines are kept as empty
    entries at indent 0.

    Args:
        text: Outline text

    Returns:
        List of (content, indent level) tuples in document order

    Example:
        >>> from_outline_text("- # Changed Pages\\n    - ## [[1.0.0]]\\n")
        [('# Changed Pages', 0), ('## [[1.0.0]]', 1)]
    """
    contents: List[ContentLine] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            contents.append(("", 0))
            continue
        if stripped.startswith(BULLET):
            stripped = stripped[len(BULLET):]
        contents.append((stripped, _count_indentation(line)))
    return contents


def to_outline_text(contents: List[ContentLine]) -> str:
    """Render (content, indent level) entries as outline text.

    Args:
        contents: Entries to render

    Returns:
        Outline text, one line per entry, newline terminated
    """
    lines = []
    for content, indent in contents:
        if content:
            lines.append(f"{INDENT_UNIT * indent}{BULLET}{content}\n")
        else:
            lines.append("\n")
    return "".join(lines)


def render_page(page: Page) -> str:
    """Render a page in the on-disk format.

    Properties come first as ``key:: value`` lines, followed by exactly one
    blank line and then the content block.
    """
    header = "".join(f"{key}:: {value}\n" for key, value in page.properties)
    return header + "\n" + to_outline_text(page.contents)


def _split_properties(lines: List[str]) -> Tuple[List[Tuple[str, str]], int]:
    properties = []
    for i, line in enumerate(lines):
        match = PROPERTY_PATTERN.match(line)
        if not match:
            return properties, i
        properties.append((match.group(1).strip(), match.group(2).strip()))
    return properties, len(lines)


def parse_page(title: str, text: str) -> Page:
    """Parse on-disk page text into a Page.

    Inverse of render_page(): leading property lines are collected, one blank
    separator line after them is consumed and the remainder is parsed as
    outline text.

    Args:
        title: Title of the page being parsed
        text: Full file content

    Returns:
        Parsed Page

    Raises:
        PageParseError: If the text is not a string (e.g. undecoded bytes)
    """
    if not isinstance(text, str):
        raise PageParseError(title, f"expected text, got {type(text).__name__}")

    lines = text.splitlines()
    properties, body_start = _split_properties(lines)

    if body_start < len(lines) and not lines[body_start].strip():
        body_start += 1

    contents = from_outline_text("".join(line + "\n" for line in lines[body_start:]))
    logger.debug(
        f"Parsed page '{title}': {len(properties)} properties, {len(contents)} entries"
    )
    return Page(title=title, properties=properties, contents=contents)
