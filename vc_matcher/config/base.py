"""Configuration errors and typed read access to settings."""

from abc import abstractmethod
from typing import Any, Mapping, Optional

from ..core.error import BaseError

FALSE_STRINGS = ("", "0", "false", "no", "off")
UNDEFINED = object()


class ConfigError(BaseError):
    """Configuration that cannot be applied."""


class BaseSettings(Mapping[str, Any]):
    """Read-only settings mapping with typed lookups."""

    @abstractmethod
    def get_value(self, *var_names: str, default: Any = None) -> Any:
        """Return the value of the first name that is defined, else `default`."""

    def get_bool(self, *var_names: str, default: bool = None) -> Optional[bool]:
        """
        Look up a flag.

        Strings such as `false`, `0`, `no` and `off` read as False, so flags
        taken from environment variables or config files behave as expected.
        """
        value = self.get_value(*var_names, default=default)
        if value is None or isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() not in FALSE_STRINGS
        return bool(value)

    def get_str(self, *var_names: str, default: str = None) -> Optional[str]:
        """Look up a value as text."""
        value = self.get_value(*var_names, default=default)
        return None if value is None else str(value)

    def __getitem__(self, name: str) -> Any:
        """Look up a single setting, raising KeyError when it is not defined."""
        if not isinstance(name, str):
            raise TypeError(f"Setting names are strings, got {type(name).__name__}")
        value = self.get_value(name, default=UNDEFINED)
        if value is UNDEFINED:
            raise KeyError(name)
        return value


SettingsLike = Optional[Mapping[str, Any]]
