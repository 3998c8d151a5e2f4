"""Changelog reconciliation for version pages.

This module provides the ChangelogReconciler which updates the "Changed
Pages" section of a version page with the pages changed in the working tree.
Records already present for the release are carried over, so running a sync
several times while preparing a release accumulates every change.
"""

import logging
from typing import Dict, List, Set

from svlmd.git_integration.models import ChangeSet
from svlmd.page_model import ContentLine, Page
from .models import (
    CATEGORIES,
    VersionEntry,
    page_link,
    parse_changelog_section,
)

logger = logging.getLogger(__name__)


class ChangelogReconciler:
    """Merges a ChangeSet into the changelog section of a page.

    The reconciler is a total function over its inputs: a page without a
    "# Changed Pages" marker gets the entry inserted after its first line
    (and whatever is nested under it), and it never raises. Lines of the
    section that are not part of the release's entry are left in place.

    Reconciliation steps:
        1. Parse the section into a tree of version entries
        2. Collect the records of every entry for the release (carried over)
           and any other lines those entries hold
        3. Remove those entries from the page
        4. Union carried-over records with the change set, sort, deduplicate
        5. Insert the regenerated entry right after the section marker and
           the notes nested directly under it

    Example:
        >>> reconciler = ChangelogReconciler()
        >>> page = Page(title="1.0.0", contents=[("# Changed Pages", 0)])
        >>> page = reconciler.reconcile(page, "[[1.0.0]]", ChangeSet(added=["Aspirin"]))
        >>> page.contents
        [('# Changed Pages', 0), ('## [[1.0.0]]', 1), ('### Added', 2), ('[[Aspirin]]', 3)]
    """

    def reconcile(self, page: Page, version_label: str, change_set: ChangeSet) -> Page:
        """Update the changelog entry for ``version_label`` in place.

        Args:
            page: Page holding the changelog section (mutated)
            version_label: Rendered version, used as ``## <version_label>``
            change_set: Pages added, modified and deleted in this run

        Returns:
            The same page, with its changelog entry regenerated
        """
        section = parse_changelog_section(page.contents, version_label)
        existing = section.find(version_label)

        carried: Dict[str, Set[str]] = {category: set() for category in CATEGORIES}
        extra: List[ContentLine] = []
        for entry in existing:
            if not entry.is_well_formed:
                logger.warning(
                    f"Changelog heading '{entry.heading}' at indent {entry.indent} "
                    f"in page '{page.title}' will be rewritten at indent 1"
                )
            for category in CATEGORIES:
                carried[category].update(entry.records(category))
            extra.extend(entry.extra)

        # Back to front so the remaining indices stay valid
        for entry in sorted(existing, key=lambda e: e.start, reverse=True):
            del page.contents[entry.start:entry.end]

        merged = self._merge(version_label, carried, extra, change_set)
        position = section.insert_position
        # Entries removed above the insert position shift it up
        for entry in existing:
            if entry.start < position:
                position -= min(entry.end, position) - entry.start
        page.contents[position:position] = merged.to_contents()

        logger.debug(
            f"Reconciled changelog entry '{merged.heading}' in page '{page.title}' "
            f"({'updated' if existing else 'created'})"
        )
        return page

    @staticmethod
    def _merge(
        version_label: str,
        carried: Dict[str, Set[str]],
        extra: List[ContentLine],
        change_set: ChangeSet,
    ) -> VersionEntry:
        """Build the regenerated entry from carried-over and new records."""
        changes = {}
        for category, titles in change_set.categories():
            records = carried[category] | {page_link(title) for title in titles}
            changes[category] = sorted(records)
        return VersionEntry(label=version_label, changes=changes, extra=extra)
