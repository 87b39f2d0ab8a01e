from unittest import TestCase

from ..error import VerificationMaterialError
from ..verification_material import (
    VERIFICATION_METHOD_SECTIONS,
    get_verification_material,
)

DID = "did:example:123"
METHOD = {
    "id": f"{DID}#key-1",
    "type": "Ed25519VerificationKey2018",
    "controller": DID,
    "publicKeyBase58": "H3C2AVvLMv6gmMNam3uVAjZpfkcJCwDwnZn6z3wXmqPV",
}
AUTH_METHOD = {
    "id": f"{DID}#key-2",
    "type": "JsonWebKey2020",
    "controller": DID,
    "publicKeyJwk": {"kty": "OKP", "crv": "Ed25519", "x": "abc"},
}


class TestVerificationMaterial(TestCase):
    def test_priority_order(self):
        assert VERIFICATION_METHOD_SECTIONS[0] == "verificationMethod"
        assert VERIFICATION_METHOD_SECTIONS[-1] == "authentication"

    def test_verification_method_first(self):
        document = {
            "id": DID,
            "authentication": [AUTH_METHOD],
            "verificationMethod": [METHOD],
        }
        assert get_verification_material(document) == METHOD

    def test_authentication_last_resort(self):
        document = {"id": DID, "authentication": [AUTH_METHOD]}
        assert get_verification_material(document) == AUTH_METHOD

    def test_priority_regardless_of_key_order(self):
        document = {
            "authentication": [AUTH_METHOD],
            "keyAgreement": [f"{DID}#key-3"],
            "id": DID,
        }
        assert get_verification_material(document) == f"{DID}#key-3"

        document = {
            "authentication": [AUTH_METHOD],
            "capabilityDelegation": METHOD,
            "assertionMethod": [f"{DID}#key-1"],
        }
        assert get_verification_material(document) == f"{DID}#key-1"

    def test_object_section(self):
        assert get_verification_material({"capabilityInvocation": METHOD}) == METHOD

    def test_no_section(self):
        assert get_verification_material({"id": DID, "service": []}) is None

    def test_illegal_method_type(self):
        for section in (f"{DID}#key-1", None, 42, []):
            with self.assertRaises(VerificationMaterialError) as context:
                get_verification_material({"assertionMethod": section})
            assert "verification method" in context.exception.message

    def test_illegal_material_type(self):
        for section in ([[METHOD]], [None]):
            with self.assertRaises(VerificationMaterialError) as context:
                get_verification_material({"verificationMethod": section})
            assert "verification material" in context.exception.message
