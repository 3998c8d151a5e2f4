"""Data models for outline pages.

A page is a Logseq outline document: an ordered block of property lines
followed by indented bullets. The model keeps both as plain ordered lists so
that a page can be rewritten without disturbing anything the tool does not own.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# A single outline entry: (content, indent level). Level 0 is top level.
ContentLine = Tuple[str, int]


@dataclass
class Page:
    """In-memory representation of a Logseq page.

    Attributes:
        title: Page title (may contain '/', which namespaces the page)
        properties: Ordered (key, value) pairs rendered as ``key:: value``
        contents: Ordered (content, indent level) entries in document order

    Example:
        >>> page = Page(
        ...     title="1.2.0",
        ...     properties=[("tags", "Version")],
        ...     contents=[("# Changed Pages", 0)],
        ... )
    """
    title: str
    properties: List[Tuple[str, str]] = field(default_factory=list)
    contents: List[ContentLine] = field(default_factory=list)

    def get_property(self, key: str) -> Optional[str]:
        """Return the value of the first property named ``key``, if any."""
        for prop_key, value in self.properties:
            if prop_key == key:
                return value
        return None
