"""Base64url helpers for compact JWT segments."""

import base64
import json
from typing import Any


def b64url_decode(value: str) -> bytes:
    """Decode base64url text, with or without its trailing padding."""
    return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))


def b64url_to_json(value: str, **kwargs) -> Any:
    """Decode a base64url JSON segment; `kwargs` are passed to `json.loads`."""
    return json.loads(b64url_decode(value), **kwargs)
