"""Root of the svlmd exception hierarchy.

Every package defines its own typed exceptions in an ``errors`` module; all of
them inherit from SvlmdError so callers can catch any application-level error
in one place.
"""


class SvlmdError(Exception):
    """Base exception for all svlmd errors.

    Use this to catch any application-level error from the tool.
    """
    pass
