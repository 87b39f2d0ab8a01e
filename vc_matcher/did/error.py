"""DID document errors."""

from ..core.error import BaseError


class VerificationMaterialError(BaseError):
    """Verification material section has an unsupported shape."""
