"""
Models of a DIF presentation definition.

Field names follow the wire format except where they collide with Python
builtins or keywords; the schema `data_key` maps them back.
"""

from typing import Any, Mapping, Sequence, Union

from marshmallow import EXCLUDE, ValidationError, fields, missing, post_dump, pre_load
from marshmallow.validate import Length, OneOf

from ..models.base import BaseModel, BaseModelSchema
from ..models.valid import StrOrNumberField

PREFERENCES = ("required", "preferred")


class SchemaInputDescriptor(BaseModel):
    """Reference to a credential schema or type by URI."""

    class Meta:
        """SchemaInputDescriptor metadata."""

        schema_class = "SchemaInputDescriptorSchema"

    def __init__(self, *, uri: str = None, required: bool = None):
        """Initialize the schema reference."""
        self.uri = uri
        self.required = required


class SchemaInputDescriptorSchema(BaseModelSchema):
    """Schema reference wire form."""

    class Meta:
        """SchemaInputDescriptorSchema metadata."""

        model_class = SchemaInputDescriptor
        unknown = EXCLUDE

    uri = fields.Str(required=True)
    required = fields.Bool()


class SchemasInputDescriptorFilter(BaseModel):
    """
    Schema references of an input descriptor, in groups.

    A plain list of references is a single group. A `oneof_filter` lists
    alternative groups, a bare reference standing for a group of one.
    """

    class Meta:
        """SchemasInputDescriptorFilter metadata."""

        schema_class = "SchemasInputDescriptorFilterSchema"

    def __init__(
        self,
        *,
        oneof_filter: bool = False,
        uri_groups: Sequence[Sequence[SchemaInputDescriptor]] = None,
    ):
        """Initialize the schema groups."""
        self.oneof_filter = oneof_filter
        self.uri_groups = uri_groups

    @property
    def schemas(self) -> Sequence[SchemaInputDescriptor]:
        """Every schema reference, group by group, in declaration order."""
        return [schema for uri_group in self.uri_groups or [] for schema in uri_group]


class SchemasInputDescriptorFilterSchema(BaseModelSchema):
    """Schema references wire form: a list, or an object with `oneof_filter`."""

    class Meta:
        """SchemasInputDescriptorFilterSchema metadata."""

        model_class = SchemasInputDescriptorFilter
        unknown = EXCLUDE

    uri_groups = fields.List(fields.List(fields.Nested(SchemaInputDescriptorSchema)))
    oneof_filter = fields.Bool()

    @pre_load
    def group_schemas(self, data, **kwargs):
        """Normalize both wire shapes into `uri_groups`."""
        if isinstance(data, list):
            return {"oneof_filter": False, "uri_groups": [data]}
        if not isinstance(data, Mapping) or "uri_groups" in data:
            return data
        alternatives = data.get("oneof_filter")
        if not isinstance(alternatives, list):
            raise ValidationError("schema must be a list or a oneof_filter object")
        return {
            "oneof_filter": True,
            "uri_groups": [
                group if isinstance(group, list) else [group]
                for group in alternatives
            ],
        }

    @post_dump
    def serialize_reformat(self, data, **kwargs):
        """Dump a single plain group back to a list."""
        uri_groups = data.get("uri_groups") or []
        if not data.get("oneof_filter") and len(uri_groups) <= 1:
            return uri_groups[0] if uri_groups else []
        return {"oneof_filter": uri_groups}


class Filter(BaseModel):
    """
    JSON Schema applied to the value found at a field path.

    `_type` is a type name or a list of names. `const` is `missing` when the
    keyword is absent, since null is a legitimate constant.
    """

    class Meta:
        """Filter metadata."""

        schema_class = "FilterSchema"

    def __init__(
        self,
        *,
        _not: bool = False,
        _type: Union[str, Sequence[str]] = None,
        fmt: str = None,
        pattern: str = None,
        minimum: Union[str, int, float] = None,
        maximum: Union[str, int, float] = None,
        min_length: int = None,
        max_length: int = None,
        exclusive_min: Union[str, int, float] = None,
        exclusive_max: Union[str, int, float] = None,
        const: Any = missing,
        enums: Sequence[Any] = None,
    ):
        """Initialize the filter."""
        self._not = _not
        self._type = _type
        self.fmt = fmt
        self.pattern = pattern
        self.minimum = minimum
        self.maximum = maximum
        self.min_length = min_length
        self.max_length = max_length
        self.exclusive_min = exclusive_min
        self.exclusive_max = exclusive_max
        self.const = const
        self.enums = enums


class FilterSchema(BaseModelSchema):
    """Filter wire form; a negated filter is wrapped in `not`."""

    class Meta:
        """FilterSchema metadata."""

        model_class = Filter
        unknown = EXCLUDE

    _type = fields.Raw(data_key="type")
    fmt = fields.Str(data_key="format")
    pattern = fields.Str(allow_none=True)
    minimum = StrOrNumberField()
    maximum = StrOrNumberField()
    min_length = fields.Int(data_key="minLength", strict=True)
    max_length = fields.Int(data_key="maxLength", strict=True)
    exclusive_min = StrOrNumberField(data_key="exclusiveMinimum")
    exclusive_max = StrOrNumberField(data_key="exclusiveMaximum")
    const = fields.Raw(allow_none=True)
    enums = fields.List(fields.Raw(allow_none=True), data_key="enum")
    _not = fields.Bool(data_key="not")

    @pre_load
    def extract_info(self, data, **kwargs):
        """Unwrap `not` and require `enum` to be a list."""
        if not isinstance(data, Mapping):
            return data
        if "not" in data:
            negated = data["not"]
            if not isinstance(negated, Mapping):
                raise ValidationError("not must hold a filter object")
            data = {**negated, "not": True}
        if "enum" in data and not isinstance(data["enum"], list):
            raise ValidationError("enum is not specified as a list")
        return data

    @post_dump
    def serialize_reformat(self, data, **kwargs):
        """Wrap a negated filter in `not`."""
        if data.pop("not", False):
            return {"not": data}
        return data


class DIFField(BaseModel):
    """Constraint on a claim, found at the first matching candidate path."""

    class Meta:
        """DIFField metadata."""

        schema_class = "DIFFieldSchema"

    def __init__(
        self,
        *,
        id: str = None,
        paths: Sequence[str] = None,
        purpose: str = None,
        predicate: str = None,
        optional: bool = None,
        _filter: Filter = None,
    ):
        """Initialize the field."""
        self.id = id
        self.paths = paths
        self.purpose = purpose
        self.predicate = predicate
        self.optional = optional
        self._filter = _filter


class DIFFieldSchema(BaseModelSchema):
    """Field wire form."""

    class Meta:
        """DIFFieldSchema metadata."""

        model_class = DIFField
        unknown = EXCLUDE

    id = fields.Str()
    paths = fields.List(
        fields.Str(), required=True, validate=Length(min=1), data_key="path"
    )
    purpose = fields.Str()
    predicate = fields.Str(validate=OneOf(PREFERENCES))
    optional = fields.Bool()
    _filter = fields.Nested(FilterSchema, data_key="filter")


class Constraints(BaseModel):
    """Fields an input descriptor places on a credential."""

    class Meta:
        """Constraints metadata."""

        schema_class = "ConstraintsSchema"

    def __init__(
        self,
        *,
        subject_issuer: str = None,
        limit_disclosure: str = None,
        _fields: Sequence[DIFField] = None,
    ):
        """Initialize the constraints."""
        self.subject_issuer = subject_issuer
        self.limit_disclosure = limit_disclosure
        self._fields = _fields


class ConstraintsSchema(BaseModelSchema):
    """Constraints wire form."""

    class Meta:
        """ConstraintsSchema metadata."""

        model_class = Constraints
        unknown = EXCLUDE

    subject_issuer = fields.Str(
        validate=OneOf(PREFERENCES), data_key="subject_is_issuer"
    )
    limit_disclosure = fields.Str()
    _fields = fields.List(fields.Nested(DIFFieldSchema), data_key="fields")


class InputDescriptors(BaseModel):
    """One way for a credential to answer the request."""

    class Meta:
        """InputDescriptors metadata."""

        schema_class = "InputDescriptorsSchema"

    def __init__(
        self,
        *,
        id: str = None,
        groups: Sequence[str] = None,
        name: str = None,
        purpose: str = None,
        metadata: dict = None,
        constraint: Constraints = None,
        schemas: SchemasInputDescriptorFilter = None,
    ):
        """Initialize the input descriptor."""
        self.id = id
        self.groups = groups
        self.name = name
        self.purpose = purpose
        self.metadata = metadata
        self.constraint = constraint
        self.schemas = schemas


class InputDescriptorsSchema(BaseModelSchema):
    """Input descriptor wire form."""

    class Meta:
        """InputDescriptorsSchema metadata."""

        model_class = InputDescriptors
        unknown = EXCLUDE

    id = fields.Str()
    groups = fields.List(fields.Str(), data_key="group")
    name = fields.Str()
    purpose = fields.Str()
    metadata = fields.Dict()
    constraint = fields.Nested(
        ConstraintsSchema, allow_none=True, data_key="constraints"
    )
    schemas = fields.Nested(
        SchemasInputDescriptorFilterSchema, allow_none=True, data_key="schema"
    )


class PresentationDefinition(BaseModel):
    """
    A verifier's request: https://identity.foundation/presentation-exchange/.

    `fmt` keeps the requested claim formats (`jwt_vc_json`, `ldp_vc`,
    `vc+sd-jwt`, ...) as given.
    """

    class Meta:
        """PresentationDefinition metadata."""

        schema_class = "PresentationDefinitionSchema"

    def __init__(
        self,
        *,
        id: str = None,
        name: str = None,
        purpose: str = None,
        fmt: Mapping[str, Any] = None,
        input_descriptors: Sequence[InputDescriptors] = None,
    ):
        """Initialize the presentation definition."""
        self.id = id
        self.name = name
        self.purpose = purpose
        self.fmt = fmt
        self.input_descriptors = input_descriptors


class PresentationDefinitionSchema(BaseModelSchema):
    """Presentation definition wire form."""

    class Meta:
        """PresentationDefinitionSchema metadata."""

        model_class = PresentationDefinition
        unknown = EXCLUDE

    id = fields.Str()
    name = fields.Str()
    purpose = fields.Str()
    fmt = fields.Dict(data_key="format")
    input_descriptors = fields.List(fields.Nested(InputDescriptorsSchema))
