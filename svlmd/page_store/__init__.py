"""Flat-file page storage for the knowledge base.

This package maps page titles to files in the Logseq pages directory and
reads/writes Page objects in the on-disk outline format.
"""

from .page_store import PageStore
from .title_converter import TitleConverter
from .errors import FilesystemError, PageNotFoundError, PageStoreError

__all__ = [
    'PageStore',
    'TitleConverter',
    'PageStoreError',
    'PageNotFoundError',
    'FilesystemError',
]
