from unittest import TestCase, mock

from .. import classloader as test_module
from ..classloader import ClassLoader, ClassNotFoundError, ModuleLoadError


class TestClassLoader(TestCase):
    def test_load_module(self):
        assert ClassLoader.load_module("unittest")
        assert (
            ClassLoader.load_module("vc_matcher.exchange").__name__
            == "vc_matcher.exchange"
        )

    def test_load_module_missing(self):
        assert ClassLoader.load_module("vc_matcher.not") is None
        assert ClassLoader.load_module("vc_matcher.not.a_module") is None
        assert ClassLoader.load_module("not-a-module") is None
        assert ClassLoader.load_module("vc_matcher.version.inner") is None

    def test_load_module_import_error(self):
        with mock.patch.object(
            test_module, "import_module", autospec=True
        ) as import_module, mock.patch.object(
            test_module, "find_spec", autospec=True
        ) as find_spec:
            find_spec.return_value = mock.MagicMock()
            import_module.side_effect = ModuleNotFoundError("dependency")
            with self.assertRaises(ModuleLoadError) as context:
                ClassLoader.load_module("vc_matcher.not_yet_imported")
        assert "dependency" in context.exception.roll_up

    def test_load_class(self):
        assert ClassLoader.load_class("unittest.TestCase") is TestCase

    def test_load_class_missing(self):
        for class_path in (
            "NotAClass",
            "vc_matcher.NotAClass",
            "not-a-module.NotAClass",
            "vc_matcher.version.__version__",
        ):
            with self.assertRaises(ClassNotFoundError):
                ClassLoader.load_class(class_path)
