"""Dict-backed settings."""

from typing import Any, Iterator, Mapping

from .base import BaseSettings, SettingsLike


class Settings(BaseSettings):
    """Settings held in a private dict, copied from the values given."""

    def __init__(self, values: Mapping[str, Any] = None):
        """Initialize the settings."""
        self._values = dict(values or {})

    @classmethod
    def coerce(cls, settings: SettingsLike) -> BaseSettings:
        """Return settings unchanged, or wrap a plain mapping (or None)."""
        if isinstance(settings, BaseSettings):
            return settings
        return cls(settings)

    def get_value(self, *var_names: str, default: Any = None) -> Any:
        """Return the value of the first name that is defined, else `default`."""
        for name in var_names:
            if name in self._values:
                return self._values[name]
        return default

    def __iter__(self) -> Iterator[str]:
        """Iterate over setting names."""
        return iter(self._values)

    def __len__(self) -> int:
        """Count the defined settings."""
        return len(self._values)

    def __repr__(self) -> str:
        """Show the settings."""
        return f"<Settings({self._values!r})>"
