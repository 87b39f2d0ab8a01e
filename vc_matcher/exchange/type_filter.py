"""
Type filters derived from presentation definition input descriptors.

Each input descriptor contributes one filter group: a filter per constraint
field whose path mentions `type`, followed by a filter per schema reference.
A credential satisfies the definition when every filter of at least one
group matches its claim document.
"""

import logging
from typing import Any, List, Mapping, NamedTuple, Optional, Sequence, Union

from .error import PresentationDefinitionError
from .path import resolve_path, strip_root
from .pres_exch import DIFField, InputDescriptors, PresentationDefinition

LOGGER = logging.getLogger(__name__)

TYPE_PATH_MARKER = "type"
SCHEMA_TYPE_PATH = "type"
SCHEMA_DECLARED_TYPE = "string"


class TypeFilter(NamedTuple):
    """Normalized constraint on a single claim of a credential."""

    path: str
    type: Optional[str]
    pattern: str

    @classmethod
    def from_field(cls, field: DIFField) -> "TypeFilter":
        """
        Build a filter from the first path of a constraint field.

        Raises:
            PresentationDefinitionError: If the field filter has no pattern

        """
        _filter = field._filter
        if _filter is None or _filter.pattern is None:
            raise PresentationDefinitionError(
                "No filter pattern in presentation definition constraint"
            )
        return cls(strip_root(field.paths[0]), _filter._type, _filter.pattern)

    @classmethod
    def from_schema_uri(cls, uri: str) -> "TypeFilter":
        """Build a filter requiring the credential type to equal a schema URI."""
        return cls(SCHEMA_TYPE_PATH, SCHEMA_DECLARED_TYPE, uri)


FilterGroup = List[TypeFilter]


def is_type_field(field: DIFField) -> bool:
    """Check whether any candidate path of a field refers to a type claim."""
    return any(TYPE_PATH_MARKER in path for path in field.paths or [])


def descriptor_type_filters(descriptor: InputDescriptors) -> FilterGroup:
    """Return the filter group for one input descriptor, possibly empty."""
    type_filters = []
    if descriptor.constraint:
        type_filters.extend(
            TypeFilter.from_field(field)
            for field in descriptor.constraint._fields or []
            if is_type_field(field)
        )
    if descriptor.schemas:
        type_filters.extend(
            TypeFilter.from_schema_uri(schema.uri)
            for schema in descriptor.schemas.schemas
        )
    return type_filters


def extract_type_filters(
    presentation_definition: Union[PresentationDefinition, Mapping],
) -> List[FilterGroup]:
    """
    Derive the filter groups of a presentation definition.

    Args:
        presentation_definition: definition model or its serialized form

    Returns:
        One filter group per input descriptor that constrains anything,
        in descriptor order

    Raises:
        PresentationDefinitionError: If a type field has no filter pattern

    """
    pres_definition = PresentationDefinition.coerce(presentation_definition)
    filter_groups = []
    for descriptor in pres_definition.input_descriptors or []:
        type_filters = descriptor_type_filters(descriptor)
        if type_filters:
            filter_groups.append(type_filters)
    LOGGER.debug(
        "Derived %d filter group(s) from presentation definition %s",
        len(filter_groups),
        pres_definition.id,
    )
    return filter_groups


def scalar_content(value: Any) -> Optional[str]:
    """Return the JSON text content of a scalar claim, None for other nodes."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def claim_document(credential: Any) -> Any:
    """Return the parsed claim document of a credential record or mapping."""
    if isinstance(credential, Mapping):
        return credential
    return getattr(credential, "parsed_document", None)


def matches_type_filter(document: Any, type_filter: TypeFilter) -> bool:
    """
    Check one filter against a claim document.

    Scalars compare by exact string content; sequences compare their last
    element, which carries the most specific credential type.
    """
    node = resolve_path(document, type_filter.path)
    if isinstance(node, list):
        node = node[-1] if node else None
    content = scalar_content(node)
    return content is not None and content == type_filter.pattern


def matches(credential: Any, filter_groups: Sequence[FilterGroup]) -> bool:
    """Check whether all filters of at least one group match the credential."""
    document = claim_document(credential)
    if document is None:
        return False
    return any(
        all(matches_type_filter(document, type_filter) for type_filter in group)
        for group in filter_groups
    )
