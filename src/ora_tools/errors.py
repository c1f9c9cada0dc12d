"""
Exceptions raised while reading and rendering OpenRaster documents.

Every error is fatal for the render that raised it; nothing is retried and no
partially composited image is ever returned.
"""

from typing import Optional


class ORAError(Exception):
    """Base class of all ora_tools errors."""


class ManifestError(ORAError, ValueError):
    """Malformed manifest, or a missing required element or numeric field."""


class NotFoundError(ORAError, LookupError):
    """The container, an entry inside it, or a named sub-stack is missing."""


class InsufficientLayersError(ORAError):
    """Too few layers survived selection to compose an image."""

    def __init__(self, count: int, minimum: int):
        super().__init__(
            "Not enough layers to combine: %d selected, %d required"
            % (count, minimum)
        )
        self.count = count
        self.minimum = minimum


class BitmapDecodeError(ORAError, ValueError):
    """A selected layer's bytes are not a valid bitmap."""

    def __init__(self, source_ref: str, reason: Optional[str] = None):
        message = "Failed to decode bitmap %r" % source_ref
        if reason:
            message += ": %s" % reason
        super().__init__(message)
        self.source_ref = source_ref
