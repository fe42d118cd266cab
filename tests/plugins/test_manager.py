"""Tests for the global plugin manager."""

from unittest import mock

import pytest

from objserial import serialize
from objserial.plugins import hook_impl
from objserial.plugins import register_hooks
from objserial.plugins import register_plugins_entry_points
from objserial.plugins import reset_global_plugin_manager
from objserial.plugins import unregister_hooks
from objserial.plugins.manager import _get_global_plugin_manager
from tests.examples.models import Point


class Counter:
    def __init__(self):
        self.count = 0

    @hook_impl
    def before_serialize(self, value):
        self.count += 1


class TestPluginManager:
    """Tests for hook registration helpers."""

    def test_register_hooks(self):
        """Test that registered hooks are called."""
        counter = Counter()
        register_hooks(counter)
        serialize(Point(1, 1))
        serialize(Point(2, 2))
        assert counter.count == 2

    def test_register_twice_is_noop(self):
        """Test that registering the same instance twice does not double-call it."""
        counter = Counter()
        register_hooks(counter, counter)
        serialize(Point(1, 1))
        assert counter.count == 1

    def test_register_class_raises(self):
        """Test that registering a class instead of an instance raises."""
        with pytest.raises(TypeError, match="forgotten the `\\(\\)`"):
            register_hooks(Counter)

    def test_unregister_hooks(self):
        """Test that unregistered hooks stop being called."""
        counter = Counter()
        register_hooks(counter)
        unregister_hooks(counter)
        serialize(Point(1, 1))
        assert counter.count == 0

    def test_reset(self):
        """Test that resetting the manager drops registered plugins."""
        counter = Counter()
        register_hooks(counter)
        reset_global_plugin_manager()
        serialize(Point(1, 1))
        assert counter.count == 0

    def test_none_input_skips_hooks(self):
        """Test that empty input does not fire hooks."""
        counter = Counter()
        register_hooks(counter)
        serialize(None)
        assert counter.count == 0

    def test_entry_points(self):
        """Test that entry point loading uses the objserial.hooks group."""
        manager = _get_global_plugin_manager()
        with mock.patch.object(manager, "load_setuptools_entrypoints", return_value=0) as load:
            assert register_plugins_entry_points() == 0
        load.assert_called_once_with("objserial.hooks")
