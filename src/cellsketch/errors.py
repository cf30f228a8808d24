"""Exception types raised at the command and I/O boundaries."""


class CellsketchError(Exception):
    """Base class for all cellsketch errors."""


class LoadFailure(CellsketchError):
    """A diagram could not be read; the current document is unchanged."""


class SaveFailure(CellsketchError):
    """A diagram could not be written; in-memory state is unaffected."""


class InvalidGeometry(CellsketchError):
    """A gesture produced geometry that cannot be committed.

    Raised for zero or negative box extents, diagonal lines, unknown shapes,
    and moves or resizes onto another shape's interior. No command is
    recorded when this is raised.
    """


class ClipboardUnavailable(CellsketchError):
    """The host clipboard cannot be reached."""


class ConfigError(CellsketchError, ValueError):
    """Settings contain an invalid value."""
