"""
Presentation Exchange evaluation of input descriptor constraints.

Unlike the type filter strategy, every candidate path of a field is tried
as a JSONPath expression and field filters are applied as JSON Schema
keywords (type, format, pattern, const, enum, numeric and length bounds,
not). Schema references match the credential schema id or its types.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from dateutil.parser import ParserError
from dateutil.parser import parse as dateutil_parser
from marshmallow import missing

from .error import PresentationDefinitionError
from .match_strategy import (
    BasePresentationDefinitionMatchStrategy,
    PresentationDefinitionLike,
)
from .path import find_all
from .pres_exch import (
    DIFField,
    Filter,
    InputDescriptors,
    PresentationDefinition,
    SchemasInputDescriptorFilter,
)
from .type_filter import claim_document

LOGGER = logging.getLogger(__name__)

DATE_FORMATS = ("date", "date-time")
JSON_SCHEMA_TYPES = {
    "string": lambda val: isinstance(val, str),
    "number": lambda val: (
        isinstance(val, (int, float)) and not isinstance(val, bool)
    ),
    "integer": lambda val: isinstance(val, int) and not isinstance(val, bool),
    "boolean": lambda val: isinstance(val, bool),
    "array": lambda val: isinstance(val, list),
    "object": lambda val: isinstance(val, dict),
    "null": lambda val: val is None,
}


class DIFPresentationDefinitionMatchStrategy(BasePresentationDefinitionMatchStrategy):
    """Match credentials against full input descriptor constraints."""

    def match(
        self,
        credentials: Sequence[Any],
        presentation_definition: PresentationDefinitionLike,
    ) -> Sequence[Any]:
        """Return the credentials satisfying at least one input descriptor."""
        pres_definition = PresentationDefinition.coerce(presentation_definition)
        descriptors = pres_definition.input_descriptors or []
        for descriptor in descriptors:
            self.check_supported(descriptor)

        result = []
        for credential in credentials:
            document = claim_document(credential)
            if not isinstance(document, dict):
                continue
            if any(
                self.descriptor_applicable(descriptor, document)
                for descriptor in descriptors
            ):
                result.append(credential)
        LOGGER.debug(
            "%d credential(s) satisfy presentation definition %s",
            len(result),
            pres_definition.id,
        )
        return result

    def check_supported(self, descriptor: InputDescriptors):
        """
        Reject constraints this strategy cannot evaluate.

        Raises:
            PresentationDefinitionError: If a field path points into the proof

        """
        constraint = descriptor.constraint
        for field in (constraint and constraint._fields) or []:
            for path in field.paths:
                if "$.proof." in path:
                    raise PresentationDefinitionError(
                        "JSON Path expression matching on proof object "
                        "is not currently supported"
                    )

    def descriptor_applicable(
        self, descriptor: InputDescriptors, document: dict
    ) -> bool:
        """Check a claim document against one input descriptor."""
        schemas = descriptor.schemas
        if schemas and schemas.schemas and not self.filter_schema(document, schemas):
            return False

        constraint = descriptor.constraint
        if not constraint:
            return True
        if constraint.subject_issuer == "required" and not self.subject_is_issuer(
            document
        ):
            return False
        return all(
            field.optional or self.filter_by_field(field, document)
            for field in constraint._fields or []
        )

    def filter_by_field(self, field: DIFField, document: dict) -> bool:
        """
        Apply a constraint field to a claim document.

        Candidate paths are tried in order until one yields a value passing
        the field filter; a field without filter only requires presence.

        Args:
            field: constraint field with candidate paths and filter
            document: claim document to apply filtering on
        Return:
            bool

        """
        for path in field.paths:
            for value in find_all(document, path) or []:
                if not field._filter:
                    return True
                if self.validate_filter(value, field._filter):
                    return True
                if isinstance(value, list) and field._filter._type != "array":
                    if any(
                        self.validate_filter(item, field._filter) for item in value
                    ):
                        return True
        return False

    def validate_filter(self, val: Any, _filter: Filter) -> bool:
        """
        Apply filter on a matched value.

        All keywords present on the filter must hold; `not` negates the result.

        Args:
            val: value to check, extracted from match
            _filter: Filter
        Return:
            bool

        """
        result = (
            self.type_check(val, _filter)
            and self.format_check(val, _filter)
            and (_filter.pattern is None or self.pattern_check(val, _filter))
            and (_filter.const is missing or val == _filter.const)
            and (_filter.enums is None or val in _filter.enums)
            and self.range_check(val, _filter)
            and self.length_check(val, _filter)
        )
        return not result if _filter._not else result

    def type_check(self, val: Any, _filter: Filter) -> bool:
        """Check the JSON type of a value against a type name or list of names."""
        if not _filter._type:
            return True
        names = _filter._type
        if not isinstance(names, list):
            names = [names]
        return any(
            isinstance(name, str)
            and name in JSON_SCHEMA_TYPES
            and JSON_SCHEMA_TYPES[name](val)
            for name in names
        )

    def format_check(self, val: Any, _filter: Filter) -> bool:
        """Check that date formatted values parse as dates."""
        if _filter.fmt not in DATE_FORMATS:
            return True
        return self.string_to_timezone_aware_datetime(val) is not None

    def pattern_check(self, val: Any, _filter: Filter) -> bool:
        """Check a string value against the filter regular expression."""
        if not isinstance(val, str):
            return True
        try:
            return bool(re.search(_filter.pattern, val))
        except re.error:
            LOGGER.warning("Invalid filter pattern: %s", _filter.pattern)
            return False

    def range_check(self, val: Any, _filter: Filter) -> bool:
        """
        Check minimum, maximum and their exclusive variants.

        Values compare as dates when the filter format is a date format,
        as numbers otherwise.

        Args:
            val: value to check, extracted from match
            _filter: Filter
        Return:
            bool

        """
        bounds = (
            (_filter.minimum, lambda given, bound: given >= bound),
            (_filter.maximum, lambda given, bound: given <= bound),
            (_filter.exclusive_min, lambda given, bound: given > bound),
            (_filter.exclusive_max, lambda given, bound: given < bound),
        )
        convert = (
            self.string_to_timezone_aware_datetime
            if _filter.fmt in DATE_FORMATS
            else self.to_numeric
        )
        for bound, compare in bounds:
            if bound is None:
                continue
            given, limit = convert(val), convert(bound)
            if given is None or limit is None or not compare(given, limit):
                return False
        return True

    def length_check(self, val: Any, _filter: Filter) -> bool:
        """Check that a string value is within minLength and maxLength."""
        if not isinstance(val, str):
            return True
        given_len = len(val)
        if _filter.min_length is not None and given_len < _filter.min_length:
            return False
        if _filter.max_length is not None and given_len > _filter.max_length:
            return False
        return True

    def to_numeric(self, val: Any) -> Optional[float]:
        """Return the numeric value of an int, float or numeric string."""
        if isinstance(val, bool):
            return None
        if isinstance(val, (int, float)):
            return val
        if isinstance(val, str):
            try:
                return int(val) if val.isdigit() else float(val)
            except ValueError:
                pass
        return None

    def string_to_timezone_aware_datetime(self, val: Any) -> Optional[datetime]:
        """Parse a date string, assuming UTC when no offset is given."""
        if not isinstance(val, str):
            return None
        try:
            parsed = dateutil_parser(val)
        except (ParserError, OverflowError, ValueError):
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    def filter_schema(
        self, document: dict, schemas: SchemasInputDescriptorFilter
    ) -> bool:
        """
        Filter by schema.

        A uri group is satisfied when all of its required schemas match and
        at least one schema matches; any satisfied group qualifies.

        Args:
            document: claim document to check
            schemas: schema references from the input descriptor
        Return:
            bool

        """
        for uri_group in schemas.uri_groups or []:
            matched = [
                self.credential_match_schema(document, schema.uri)
                for schema in uri_group
            ]
            required_matched = all(
                is_match
                for schema, is_match in zip(uri_group, matched)
                if schema.required
            )
            if required_matched and any(matched):
                return True
        return False

    def credential_match_schema(self, document: dict, schema_id: str) -> bool:
        """
        Credential matching by schema.

        Matches the credentialSchema id, a credential type, or a type IRI whose
        fragment or last path segment is a credential type.

        Args:
            document: claim document to check
            schema_id: schema uri to check
        Return:
            bool

        """
        if schema_id in self.schema_ids(document):
            return True
        for cred_type in self.types(document):
            if schema_id == cred_type or re.search(
                rf"[#/]{re.escape(cred_type)}$", schema_id
            ):
                return True
        return False

    def subject_is_issuer(self, document: dict) -> bool:
        """Check if the credential issuer is also one of its subjects."""
        issuer = document.get("issuer")
        if isinstance(issuer, dict):
            issuer = issuer.get("id")
        return bool(issuer) and issuer in self.subject_ids(document)

    @staticmethod
    def types(document: dict) -> Sequence[str]:
        """Return the credential types, including an SD-JWT `vct`."""
        types = document.get("type") or []
        if isinstance(types, str):
            types = [types]
        if isinstance(document.get("vct"), str):
            types = [*types, document["vct"]]
        return [cred_type for cred_type in types if isinstance(cred_type, str)]

    @staticmethod
    def schema_ids(document: dict) -> Sequence[str]:
        """Return the ids of the credential schemas."""
        schemas = document.get("credentialSchema") or []
        if isinstance(schemas, dict):
            schemas = [schemas]
        return [
            schema.get("id") for schema in schemas if isinstance(schema, dict)
        ]

    @staticmethod
    def subject_ids(document: dict) -> Sequence[str]:
        """Return the ids of the credential subjects."""
        subjects = document.get("credentialSubject") or []
        if isinstance(subjects, dict):
            subjects = [subjects]
        return [
            subject.get("id")
            for subject in subjects
            if isinstance(subject, dict) and subject.get("id")
        ]
