"""Flat-file storage for Logseq pages.

This module provides the PageStore class which loads and saves Page objects
to the pages directory of the knowledge base. Writes are atomic: content is
staged in a temporary file next to the target and moved into place.
"""

import logging
import os
import tempfile

from svlmd.page_model import Page, parse_page, render_page
from .errors import FilesystemError, PageNotFoundError
from .title_converter import TitleConverter

logger = logging.getLogger(__name__)

# Maximum page size to prevent memory exhaustion
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MB in bytes


class PageStore:
    """Loads and saves pages in a Logseq pages directory.

    File structure:
        <root>/pages/
          Aspirin.md            # Page "Aspirin"
          Drugs___Aspirin.md    # Page "Drugs/Aspirin"
          1.2.0.md              # Version page "1.2.0"

    Example:
        >>> store = PageStore("/path/to/kb/pages")
        >>> if not store.exists("Version"):
        ...     store.write(Page(title="Version"))
        >>> page = store.read("Version")
    """

    def __init__(self, pages_dir: str):
        """Initialize the page store.

        Args:
            pages_dir: Directory containing the page files
        """
        self.pages_dir = os.path.abspath(str(pages_dir))

    def path_for(self, title: str) -> str:
        """Return the file path used to store the page ``title``."""
        return os.path.join(self.pages_dir, TitleConverter.title_to_filename(title))

    def exists(self, title: str) -> bool:
        """Check whether a page file exists for ``title``."""
        return os.path.isfile(self.path_for(title))

    def read(self, title: str) -> Page:
        """Read and parse a page.

        Args:
            title: Title of the page to read

        Returns:
            Parsed Page

        Raises:
            PageNotFoundError: If no file exists for the title
            FilesystemError: If the file cannot be read
            PageParseError: If the file content cannot be parsed
        """
        file_path = self.path_for(title)

        try:
            file_size = os.path.getsize(file_path)
        except FileNotFoundError:
            raise PageNotFoundError(title, file_path)
        except OSError as e:
            raise FilesystemError(file_path, 'stat', str(e))

        if file_size > MAX_FILE_SIZE:
            size_mb = file_size / (1024 * 1024)
            max_mb = MAX_FILE_SIZE / (1024 * 1024)
            raise FilesystemError(
                file_path,
                'read',
                f'File size ({size_mb:.2f} MB) exceeds maximum allowed size ({max_mb:.0f} MB)'
            )

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise PageNotFoundError(title, file_path)
        except PermissionError:
            raise FilesystemError(file_path, 'read', 'Permission denied')
        except (OSError, UnicodeDecodeError) as e:
            raise FilesystemError(file_path, 'read', str(e))

        logger.debug(f"Read page '{title}' from {file_path}")
        return parse_page(title, content)

    def write(self, page: Page) -> None:
        """Write a page, replacing any existing file.

        The rendered page is written to a temporary file in the pages
        directory and then moved over the target, so readers never observe a
        partially written page.

        Args:
            page: Page to write

        Raises:
            FilesystemError: If the page cannot be written
        """
        file_path = self.path_for(page.title)
        content = render_page(page)

        try:
            os.makedirs(self.pages_dir, exist_ok=True)
        except OSError as e:
            raise FilesystemError(self.pages_dir, 'create_directory', str(e))

        temp_path = None
        try:
            fd, temp_path = tempfile.mkstemp(
                prefix=".svlmd-", suffix=".tmp", dir=self.pages_dir
            )
            with os.fdopen(fd, 'w', encoding='utf-8', newline='\n') as f:
                f.write(content)
            os.replace(temp_path, file_path)
            temp_path = None
        except PermissionError:
            raise FilesystemError(file_path, 'write', 'Permission denied')
        except OSError as e:
            raise FilesystemError(file_path, 'write', str(e))
        finally:
            if temp_path and os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError as e:
                    logger.warning(f"Failed to remove temp file {temp_path}: {e}")

        logger.info(f"Wrote page '{page.title}' to {file_path}")
