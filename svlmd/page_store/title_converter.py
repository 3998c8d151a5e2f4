"""Title to filename conversion for Logseq pages.

Logseq stores namespaced pages ("Drugs/Aspirin") as flat files in the pages
directory, replacing each '/' with a triple underscore.
"""

PAGE_EXTENSION = ".md"
NAMESPACE_SEPARATOR = "/"
NAMESPACE_FILE_SEPARATOR = "___"


class TitleConverter:
    """Converts page titles to filenames and back.

    Conversion rules:
    - '/' → '___'
    - .md extension is appended
    - Everything else is kept exactly as in the title

    Examples:
        - "Aspirin" → "Aspirin.md"
        - "Drugs/Aspirin" → "Drugs___Aspirin.md"
    """

    @staticmethod
    def title_to_filename(title: str) -> str:
        """Convert a page title to its filename.

        Args:
            title: The page title

        Returns:
            Filename with .md extension

        Examples:
            >>> TitleConverter.title_to_filename("A/B")
            'A___B.md'
        """
        return title.replace(NAMESPACE_SEPARATOR, NAMESPACE_FILE_SEPARATOR) + PAGE_EXTENSION

    @staticmethod
    def filename_to_title(filename: str) -> str:
        """Convert a filename back to the page title.

        Args:
            filename: The filename (with or without .md extension)

        Returns:
            The page title

        Examples:
            >>> TitleConverter.filename_to_title("A___B.md")
            'A/B'
        """
        if filename.endswith(PAGE_EXTENSION):
            filename = filename[:-len(PAGE_EXTENSION)]
        return filename.replace(NAMESPACE_FILE_SEPARATOR, NAMESPACE_SEPARATOR)
