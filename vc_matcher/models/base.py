"""Plain model classes paired with the marshmallow schema of their wire form."""

import logging
import sys
from typing import Mapping, Optional, Type, TypeVar, Union

from marshmallow import Schema, ValidationError, post_dump, post_load

from ..core.error import BaseError

LOGGER = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound="BaseModel")


class BaseModelError(BaseError):
    """A model could not be loaded from, or dumped to, its wire form."""


class BaseModel:
    """
    Model described by a schema.

    Subclasses name their schema in `Meta.schema_class`, either as the class or
    as the name of a class defined in the same module, which lets a model
    precede its schema.
    """

    class Meta:
        """BaseModel metadata."""

        schema_class = None

    @classmethod
    def _schema(cls) -> "BaseModelSchema":
        schema_cls = cls.Meta.schema_class
        if isinstance(schema_cls, str):
            schema_cls = getattr(sys.modules[cls.__module__], schema_cls, None)
        if not isinstance(schema_cls, type) or not issubclass(
            schema_cls, BaseModelSchema
        ):
            raise TypeError(f"{cls.__name__} does not name a BaseModelSchema")
        return schema_cls()

    @classmethod
    def deserialize(
        cls: Type[ModelType],
        obj: Union[str, Mapping, None],
        *,
        none2none: bool = False,
    ) -> Optional[ModelType]:
        """
        Load a model from JSON text or a mapping.

        Args:
            obj: the wire form
            none2none: load None as None rather than failing

        Raises:
            BaseModelError: If `obj` does not validate against the schema

        """
        if obj is None and none2none:
            return None
        schema = cls._schema()
        try:
            return schema.loads(obj) if isinstance(obj, str) else schema.load(obj)
        except (AttributeError, TypeError, ValueError, ValidationError) as err:
            LOGGER.debug("Invalid %s: %s", cls.__name__, err)
            raise BaseModelError(f"{cls.__name__} schema validation failed") from err

    @classmethod
    def coerce(cls: Type[ModelType], obj: Union["BaseModel", Mapping]) -> ModelType:
        """Return the model instance for either a model or its serialized form."""
        if isinstance(obj, cls):
            return obj
        return cls.deserialize(obj)

    def serialize(self) -> dict:
        """Dump the model to a JSON-compatible dict, leaving out unset values."""
        try:
            return self._schema().dump(self)
        except (AttributeError, ValidationError) as err:
            raise BaseModelError(f"{type(self).__name__} cannot be dumped") from err

    def __repr__(self) -> str:
        """Show the model attributes, except those listed in `Meta.repr_exclude`."""
        exclude = getattr(self.Meta, "repr_exclude", ())
        attrs = ", ".join(
            f"{name}={value!r}"
            for name, value in vars(self).items()
            if name not in exclude
        )
        return f"<{type(self).__name__}({attrs})>"


class BaseModelSchema(Schema):
    """Schema loading into `Meta.model_class` instances."""

    class Meta:
        """BaseModelSchema metadata."""

        model_class = None

    @post_load
    def make_model(self, data: dict, **kwargs):
        """Build the model from the loaded values."""
        return self.Meta.model_class(**data)

    @post_dump
    def remove_skipped_values(self, data, **kwargs):
        """Drop attributes that are None."""
        if not isinstance(data, dict):
            return data
        return {key: value for key, value in data.items() if value is not None}
