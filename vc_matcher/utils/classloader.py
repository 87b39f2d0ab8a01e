"""Resolve classes from dotted import paths."""

from importlib import import_module
from importlib.util import find_spec
from types import ModuleType
from typing import Optional, Type

from ..core.error import BaseError


class ModuleLoadError(BaseError):
    """A module was found but could not be imported."""


class ClassNotFoundError(BaseError):
    """A dotted path does not lead to a class."""


class ClassLoader:
    """Import modules and classes named by absolute dotted paths."""

    @classmethod
    def load_module(cls, mod_path: str) -> Optional[ModuleType]:
        """
        Import a module.

        Args:
            mod_path: absolute module path, ie. `vc_matcher.exchange.provider`

        Returns:
            The module, or None when no such module exists

        Raises:
            ModuleLoadError: If the module exists but one of its imports is missing

        """
        try:
            spec = find_spec(mod_path)
        except (ModuleNotFoundError, ValueError):
            # a missing parent package, or a module without spec
            return None
        if spec is None:
            return None

        try:
            return import_module(mod_path)
        except ModuleNotFoundError as err:
            raise ModuleLoadError(f"Unable to import module {mod_path}") from err

    @classmethod
    def load_class(cls, class_path: str) -> Type:
        """
        Resolve `package.module.ClassName` to the class itself.

        Raises:
            ClassNotFoundError: If the module or class cannot be found
            ModuleLoadError: If the module fails to import

        """
        mod_path, _, class_name = class_path.rpartition(".")
        if not mod_path:
            raise ClassNotFoundError(f"No module in class path: {class_path}")

        module = cls.load_module(mod_path)
        if module is None:
            raise ClassNotFoundError(f"Module not found: {mod_path}")
        resolved = getattr(module, class_name, None)
        if not isinstance(resolved, type):
            raise ClassNotFoundError(f"{class_name} is not a class in {mod_path}")
        return resolved
