"""Errors raised while building or restoring QR symbols."""

from __future__ import annotations


class QRViewError(Exception):
    """Base class for every qrview error."""


class InvalidInputType(QRViewError, TypeError):
    """The content to encode is not text."""


class UnsupportedContent(QRViewError, ValueError):
    """No encoding mode covers every character of the content."""


class ContentTooLarge(QRViewError, ValueError):
    """The content does not fit any version at the admissible error levels."""


class MalformedPersistedState(QRViewError, ValueError):
    """A serialized symbol is missing fields or has the wrong shape."""
