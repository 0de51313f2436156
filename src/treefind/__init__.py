"""treefind — recursive filesystem search by name, kind, extension or regex."""

__version__ = "0.1.0"


class TreefindError(Exception):
    """User-facing CLI error.

    The message is printed to stderr and the process exits with code 1.
    """


class ConfigError(TreefindError):
    """Search options are missing, ambiguous or invalid.

    Raised before any traversal starts.
    """


class WalkError(TreefindError):
    """A directory could not be enumerated or a path could not be resolved.

    Aborts the whole walk.
    """


class ClassifyError(TreefindError):
    """Type or permission metadata of an entry could not be read."""
