"""Exception types raised while loading, checking, and rendering content"""


class MdblogError(Exception):
    """Base class for mdblog errors."""


class FrontMatterError(MdblogError, ValueError):
    """Front matter block is not a flat key/value mapping."""


class ContentPathError(MdblogError, ValueError):
    """A document path resolves outside the content root."""


class LayoutNotFoundError(MdblogError):
    """No template exists for the layout a document asks for."""

    def __init__(self, layout: str):
        super().__init__(f"Unknown layout '{layout}'")
        self.layout = layout
