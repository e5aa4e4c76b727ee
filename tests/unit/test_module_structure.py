"""
Tests for the eventmonitor package structure.

These tests verify that the public API is exported from the top-level package
and the subpackages import without errors.
"""

import pytest


class TestModuleImportable:
    """Tests that the package and its subpackages are importable."""

    @pytest.mark.parametrize(
        "module_name",
        [
            "eventmonitor",
            "eventmonitor.events",
            "eventmonitor.exceptions",
            "eventmonitor.execution",
            "eventmonitor.handlers",
            "eventmonitor.monitoring",
            "eventmonitor.testing",
            "eventmonitor.testing.plugin",
        ],
    )
    def test_module_importable(self, module_name: str) -> None:
        import importlib

        assert importlib.import_module(module_name) is not None


class TestPublicApi:
    """Tests that everything in __all__ is importable from the package."""

    def test_all_names_exist(self) -> None:
        import eventmonitor

        missing = [name for name in eventmonitor.__all__ if not hasattr(eventmonitor, name)]
        assert missing == []

    def test_version_is_string(self) -> None:
        import eventmonitor

        assert isinstance(eventmonitor.__version__, str)

    def test_testing_all_names_exist(self) -> None:
        import eventmonitor.testing

        missing = [
            name for name in eventmonitor.testing.__all__ if not hasattr(eventmonitor.testing, name)
        ]
        assert missing == []
