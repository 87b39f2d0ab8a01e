"""Model for representing a credential held in a wallet."""

import binascii
import json
import logging

from typing import Mapping, Optional, Sequence
from uuid import uuid4

from marshmallow import EXCLUDE, fields

from ..models.base import BaseModel, BaseModelSchema
from ..utils.b64 import b64url_to_json

LOGGER = logging.getLogger(__name__)

SD_JWT_SEPARATOR = "~"


class JsonNumber(float):
    """A JSON number that keeps the literal it was written as, ie. `1.10`."""

    def __new__(cls, literal: str):
        """Parse the literal, remembering its text."""
        number = super().__new__(cls, literal)
        number.literal = literal
        return number

    def __str__(self) -> str:
        """Return the literal text."""
        return str(self.literal)


def parse_document(document: Optional[str]) -> Optional[dict]:
    """
    Parse the claim document out of a raw credential.

    Args:
        document: JSON credential, or a compact JWT / SD-JWT credential

    Returns:
        The claim document, the `vc` claim of a JWT payload when present,
        or None when the raw credential cannot be parsed

    """
    if not document:
        return None
    document = document.strip()

    if document.startswith("{"):
        try:
            parsed = json.loads(document, parse_float=JsonNumber)
        except ValueError:
            LOGGER.warning("Credential document is not valid JSON")
            return None
        return parsed if isinstance(parsed, dict) else None

    segments = document.split(SD_JWT_SEPARATOR, 1)[0].split(".")
    if len(segments) != 3:
        LOGGER.warning("Credential document is neither JSON nor a compact JWT")
        return None
    try:
        payload = b64url_to_json(segments[1], parse_float=JsonNumber)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        LOGGER.warning("Credential JWT payload could not be decoded")
        return None
    if not isinstance(payload, dict):
        return None

    vc = payload.get("vc")
    return vc if isinstance(vc, dict) else payload


class WalletCredential(BaseModel):
    """Wallet credential record class."""

    class Meta:
        """WalletCredential metadata."""

        schema_class = "WalletCredentialSchema"
        repr_exclude = ["document", "_parsed_document"]

    def __init__(
        self,
        *,
        document: str = None,  # raw credential as received from the issuer
        parsed_document: Mapping = None,  # claim document, derived when omitted
        wallet_id: str = None,
        disclosures: Sequence[str] = None,  # SD-JWT disclosures, if any
        fmt: str = None,  # credential format, ie. ldp_vc or jwt_vc_json
        added_on: str = None,
        record_id: str = None,
    ):
        """Initialize wallet credential record."""
        super().__init__()
        self.document = document
        self._parsed_document = parsed_document
        self.wallet_id = wallet_id
        self.disclosures = list(disclosures) if disclosures else []
        self.fmt = fmt
        self.added_on = added_on
        self.record_id = record_id or uuid4().hex

    @property
    def parsed_document(self) -> Optional[dict]:
        """Accessor for the claim document, None when it cannot be parsed."""
        if self._parsed_document is not None:
            return self._parsed_document
        return parse_document(self.document)

    def __eq__(self, other: object) -> bool:
        """Compare two wallet credentials for equality."""
        if not isinstance(other, WalletCredential):
            return False
        return (
            other.record_id == self.record_id
            and other.wallet_id == self.wallet_id
            and other.document == self.document
            and other.parsed_document == self.parsed_document
        )


class WalletCredentialSchema(BaseModelSchema):
    """Wallet credential record schema class."""

    class Meta:
        """Wallet credential record schema metadata."""

        model_class = WalletCredential
        unknown = EXCLUDE

    document = fields.Str(
        metadata={
            "description": "Raw credential",
            "example": "eyJhbGciOiJFZERTQSJ9.eyJ2YyI6e319.c2ln",
        }
    )
    parsed_document = fields.Dict(
        data_key="parsedDocument",
        metadata={"description": "(JSON-serializable) claim document"},
    )
    wallet_id = fields.Str(
        data_key="wallet", metadata={"description": "Wallet identifier"}
    )
    disclosures = fields.List(
        fields.Str(metadata={"description": "Selective disclosure"})
    )
    fmt = fields.Str(
        data_key="format",
        metadata={"description": "Credential format", "example": "jwt_vc_json"},
    )
    added_on = fields.Str(
        data_key="addedOn",
        metadata={"description": "Time added", "example": "2024-01-01T00:00:00Z"},
    )
    record_id = fields.Str(
        data_key="id",
        metadata={"description": "Record identifier"},
    )
