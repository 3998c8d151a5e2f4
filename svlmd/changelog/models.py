"""Tree model of the "Changed Pages" section of a version page.

The section is stored in the page as plain outline entries:

    - # Changed Pages                  (indent 0, section marker)
        - ## [[1.2.0]]                 (indent 1, version entry)
            - ### Added                (indent 2, category)
                - [[Aspirin]]          (indent 3, change record)

parse_changelog_section() reads these entries in one pass into a
ChangelogSection holding VersionEntry nodes, each remembering the slice of
page contents it came from so the reconciler can replace it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from svlmd.page_model import ContentLine

SECTION_MARKER = "# Changed Pages"
VERSION_PREFIX = "## "
CATEGORY_PREFIX = "### "

# Fixed output order of the categories
CATEGORIES = ("Added", "Modified", "Deleted")

VERSION_INDENT = 1
CATEGORY_INDENT = 2
RECORD_INDENT = 3


def page_link(title: str) -> str:
    """Render a page title as a change record: ``[[title]]``."""
    return f"[[{title}]]"


@dataclass
class VersionEntry:
    """One release entry of the changelog section.

    Attributes:
        label: Heading text after '## ' (e.g. "[[1.2.0]]")
        changes: Category name → change records ("[[Title]]") in page order
        extra: Other lines of the entry (notes, unknown categories), kept in
            page order below the heading
        start: Index of the heading in page contents (None if not on a page)
        end: Index one past the last entry line (None if not on a page)
        indent: Indent level the heading was found at
    """
    label: str
    changes: Dict[str, List[str]] = field(default_factory=dict)
    extra: List[ContentLine] = field(default_factory=list)
    start: Optional[int] = None
    end: Optional[int] = None
    indent: int = VERSION_INDENT

    @property
    def heading(self) -> str:
        return VERSION_PREFIX + self.label

    @property
    def is_well_formed(self) -> bool:
        return self.indent == VERSION_INDENT

    def records(self, category: str) -> List[str]:
        return self.changes.get(category, [])

    def to_contents(self) -> List[ContentLine]:
        """Render the entry as outline entries.

        Extra lines come right after the heading so that none of them can be
        read back as a record. Empty categories are omitted; categories appear
        in CATEGORIES order.
        """
        contents: List[ContentLine] = [(self.heading, VERSION_INDENT)]
        contents.extend(self.extra)
        for category in CATEGORIES:
            records = self.records(category)
            if not records:
                continue
            contents.append((CATEGORY_PREFIX + category, CATEGORY_INDENT))
            contents.extend((record, RECORD_INDENT) for record in records)
        return contents


@dataclass
class ChangelogSection:
    """The parsed "Changed Pages" section.

    Attributes:
        start: Index of the section marker, or 0 when the page has none
        has_marker: Whether the marker line was found
        end: Index one past the last line belonging to the section
        preamble_end: Index one past the lines nested under the section start
            that come before the first entry (notes about the section)
        entries: Version entries in page order
    """
    start: int
    has_marker: bool
    end: int
    preamble_end: int
    entries: List[VersionEntry] = field(default_factory=list)

    @property
    def insert_position(self) -> int:
        """Where a new version entry goes: right after the marker and its notes."""
        return self.preamble_end

    def find(self, label: str) -> List[VersionEntry]:
        """Return every entry whose heading carries ``label``."""
        return [entry for entry in self.entries if entry.label == label]


def _is_entry_heading(text: str, level: int, label: Optional[str]) -> bool:
    """A ``## `` line at indent 1, or one carrying ``label`` at any indent."""
    if not text.startswith(VERSION_PREFIX):
        return False
    return level == VERSION_INDENT or (label is not None and text[len(VERSION_PREFIX):] == label)


def _parse_entry(contents: List[ContentLine], start: int, end: int) -> VersionEntry:
    heading, indent = contents[start]
    changes: Dict[str, List[str]] = {}
    extra: List[ContentLine] = []
    category = None
    category_indent = indent

    for text, level in contents[start + 1:end]:
        if text.startswith(CATEGORY_PREFIX) and text[len(CATEGORY_PREFIX):] in CATEGORIES:
            category = text[len(CATEGORY_PREFIX):]
            category_indent = level
            changes.setdefault(category, [])
        elif category and level > category_indent and text.startswith("[["):
            changes[category].append(text)
        else:
            if level <= category_indent:
                category = None
            # Re-indented as if the heading sat at indent 1
            extra.append((text, level - indent + VERSION_INDENT))

    return VersionEntry(
        label=heading[len(VERSION_PREFIX):],
        changes=changes,
        extra=extra,
        start=start,
        end=end,
        indent=indent,
    )


def parse_changelog_section(
    contents: List[ContentLine],
    label: Optional[str] = None,
) -> ChangelogSection:
    """Parse the "Changed Pages" section of a page in a single pass.

    The section starts at the first indent-0 ``# Changed Pages`` line and
    ends at the next non-empty indent-0 line that is not a version heading.
    When the page has no marker the section starts at index 0 and spans the
    whole page.

    A version entry starts at a ``## `` line at indent 1. A ``## `` line at
    another indent only starts an entry when it carries ``label``, so that a
    misplaced heading of the release being reconciled is merged instead of
    duplicated. An entry runs until the next entry heading or the first line
    at or above the heading's indent. Lines nested under the section start
    before the first entry belong to no entry; new entries are inserted
    below them so that they stay on top of the section.

    Inside an entry, every ``[[...]]`` line nested deeper than a known
    category header is a record of that category, whatever its indent, so
    records nested below indent 3 are rendered back at indent 3. Any other
    line at or above the category header's indent closes the category. Lines
    that are neither headers nor records are kept as the entry's extra lines.

    Args:
        contents: Page contents
        label: Label of the release being reconciled, if any

    Returns:
        ChangelogSection with the entries found
    """
    start = 0
    has_marker = False
    for i, (text, level) in enumerate(contents):
        if text == SECTION_MARKER and level == 0:
            start = i
            has_marker = True
            break

    preamble_end = start + 1
    if contents:
        base_level = contents[start][1]
        while preamble_end < len(contents):
            text, level = contents[preamble_end]
            if level <= base_level or _is_entry_heading(text, level, label):
                break
            preamble_end += 1

    scan_from = start + 1 if has_marker else start
    section = ChangelogSection(
        start=start,
        has_marker=has_marker,
        end=len(contents),
        preamble_end=preamble_end,
    )

    entry_start = None
    entry_indent = VERSION_INDENT
    for i in range(scan_from, len(contents)):
        text, level = contents[i]

        if _is_entry_heading(text, level, label):
            if entry_start is not None:
                section.entries.append(_parse_entry(contents, entry_start, i))
            entry_start, entry_indent = i, level
            continue

        if entry_start is not None and level <= entry_indent:
            section.entries.append(_parse_entry(contents, entry_start, i))
            entry_start = None

        # Without a marker the whole page is searched
        if level == 0 and text and has_marker:
            section.end = i
            break

    else:
        if entry_start is not None:
            section.entries.append(_parse_entry(contents, entry_start, len(contents)))

    return section
