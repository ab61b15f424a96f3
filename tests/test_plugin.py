import logging

import pytest

from shrs.plugin import FailMode, Plugin, PluginMeta


class _Recorder(Plugin):
    def __init__(self):
        self.seen = []

    def init(self, shell):
        self.seen.append(shell)


class _Described(Plugin):
    def init(self, shell):
        raise RuntimeError("broken")

    def meta(self):
        return PluginMeta(name="described", description="does things")

    def fail_mode(self):
        return FailMode.WARN


def test_plugin_is_abstract():
    with pytest.raises(TypeError):
        Plugin()


def test_default_meta_warns(caplog):
    with caplog.at_level(logging.WARNING):
        meta = Plugin.meta(_Recorder())
    assert meta == PluginMeta()
    assert meta.name == "unnamed plugin"
    assert meta.description == "a plugin for shrs"
    assert any("default plugin metadata" in r.getMessage() for r in caplog.records)


def test_default_fail_mode_is_abort():
    assert Plugin.fail_mode(_Recorder()) is FailMode.ABORT


def test_overridden_meta_and_fail_mode():
    plugin = _Described()
    assert plugin.meta() == PluginMeta(name="described", description="does things")
    assert plugin.meta() != PluginMeta()
    assert plugin.fail_mode() is FailMode.WARN
    assert plugin.fail_mode() is not Plugin.fail_mode(plugin)
    with pytest.raises(RuntimeError):
        plugin.init(None)