"""Select the key-bearing verification material of a DID document."""

from typing import Any, Mapping, Optional, Sequence

from .error import VerificationMaterialError

VERIFICATION_METHOD_SECTIONS: Sequence[str] = (
    "verificationMethod",
    "assertionMethod",
    "capabilityInvocation",
    "capabilityDelegation",
    "keyAgreement",
    "authentication",
)


def _verification_method(section: Any) -> Any:
    if isinstance(section, list):
        if not section:
            raise VerificationMaterialError("Illegal verification method type")
        return section[0]
    if isinstance(section, dict):
        return section
    raise VerificationMaterialError("Illegal verification method type")


def _verification_material(method: Any) -> Any:
    if isinstance(method, dict):
        return method
    if isinstance(method, (str, int, float, bool)):
        return method
    raise VerificationMaterialError("Illegal verification material type")


def get_verification_material(document: Mapping[str, Any]) -> Optional[Any]:
    """
    Return the verification material of a DID document.

    The first section present, by the fixed priority of
    `VERIFICATION_METHOD_SECTIONS`, is used; a list section yields its first
    entry. Embedded methods are returned as objects, referenced methods as
    their DID URL.

    Args:
        document: parsed DID document

    Returns:
        The verification material, or None if the document has no
        verification method section

    Raises:
        VerificationMaterialError: If the section or its entry has an
            unsupported shape

    """
    section_name = next(
        (name for name in VERIFICATION_METHOD_SECTIONS if name in document), None
    )
    if section_name is None:
        return None
    return _verification_material(_verification_method(document[section_name]))
