import base64
import json

from unittest import TestCase

from ..b64 import b64url_decode, b64url_to_json


def encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode().rstrip("=")


class TestB64(TestCase):
    def test_decode_unpadded(self):
        for data in (b"", b"c", b"cl", b"cla", b"claims", b"\xfb\xff"):
            assert b64url_decode(encode(data)) == data

    def test_decode_padded(self):
        assert b64url_decode(base64.urlsafe_b64encode(b"cl").decode()) == b"cl"

    def test_to_json(self):
        encoded = encode(json.dumps({"vc": {"type": "X"}}).encode())
        assert b64url_to_json(encoded) == {"vc": {"type": "X"}}
        assert b64url_to_json(encode(b"[1.5]"), parse_float=str) == ["1.5"]
