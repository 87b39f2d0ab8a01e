"""Presentation exchange errors."""

from ..core.error import BaseError


class PresentationDefinitionError(BaseError):
    """Presentation definition is malformed or uses unsupported features."""
