import json

from unittest import TestCase

from marshmallow import EXCLUDE, INCLUDE, ValidationError, fields, validates_schema

from ..base import BaseModel, BaseModelError, BaseModelSchema


class Degree(BaseModel):
    class Meta:
        schema_class = "DegreeSchema"
        repr_exclude = ["secret"]

    def __init__(self, *, name=None, level=None, secret=None):
        self.name = name
        self.level = level
        self.secret = secret


class DegreeSchema(BaseModelSchema):
    class Meta:
        model_class = Degree
        unknown = EXCLUDE

    name = fields.String(required=True)
    level = fields.String(required=False)
    secret = fields.String(required=False)

    @validates_schema
    def validate_fields(self, data, **kwargs):
        if data["name"] == "invalid":
            raise ValidationError("name must be valid")


class Extensible(BaseModel):
    class Meta:
        schema_class = "ExtensibleSchema"

    def __init__(self, *, name=None, **kwargs):
        self.name = name
        self.extra = kwargs


class ExtensibleSchema(BaseModelSchema):
    class Meta:
        model_class = Extensible
        unknown = INCLUDE

    name = fields.String(required=True)


class Unbound(BaseModel):
    pass


class TestBaseModel(TestCase):
    def test_deserialize_dict_and_string(self):
        degree = Degree.deserialize({"name": "BSc"})
        assert isinstance(degree, Degree)
        assert degree.name == "BSc"
        assert degree.level is None

        assert Degree.deserialize(json.dumps({"name": "BSc"})).name == "BSc"

    def test_deserialize_fails(self):
        for obj in ({"name": "invalid"}, {"level": "1"}, "{not json", [1], None):
            with self.assertRaises(BaseModelError):
                Degree.deserialize(obj)

    def test_deserialize_none(self):
        assert Degree.deserialize(None, none2none=True) is None

    def test_unknown(self):
        degree = Degree.deserialize({"name": "BSc", "extra": "dropped"})
        assert not hasattr(degree, "extra")

        model = Extensible.deserialize({"name": "x", "extra": "kept"})
        assert model.extra == {"extra": "kept"}

    def test_serialize_skips_none(self):
        assert Degree(name="BSc").serialize() == {"name": "BSc"}

    def test_coerce(self):
        degree = Degree(name="BSc")
        assert Degree.coerce(degree) is degree
        assert Degree.coerce({"name": "BSc"}).name == "BSc"

    def test_repr(self):
        text = repr(Degree(name="BSc", secret="hidden"))
        assert text.startswith("<Degree(")
        assert "BSc" in text
        assert "hidden" not in text

    def test_missing_schema_class(self):
        with self.assertRaises(TypeError):
            Unbound.deserialize({})
