"""SVLMD (Sira's Very Large Medical Database) tooling.

Maintains the Logseq pages of the knowledge base and keeps the per-release
changelog pages in sync with the pages changed in the git working tree.
"""

__version__ = "0.1.0"
