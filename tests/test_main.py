import importlib
import logging

import pytest

pytest.importorskip('tkinter')

from autoclicker.config import Config, default_hotkey
from autoclicker.hotkey import parse_hotkey
import autoclicker.main
from autoclicker.main import resolve_hotkey


def test_resolve_configured_hotkey():
    config = Config(hotkey='<alt>+<f8>')
    assert resolve_hotkey(config) == parse_hotkey('<alt>+<f8>')


def test_resolve_invalid_hotkey_falls_back():
    config = Config(hotkey='<hyper>+<banana>')
    assert resolve_hotkey(config) == parse_hotkey(default_hotkey())


def test_resolve_uses_check_for_key_names():
    def reject_banana(hotkey):
        if hotkey.key == 'banana':
            raise ValueError(hotkey.key)
        return hotkey

    assert resolve_hotkey(Config(hotkey='<ctrl>+<banana>'), reject_banana) == parse_hotkey(default_hotkey())
    assert resolve_hotkey(Config(hotkey='<ctrl>+<home>'), reject_banana) == parse_hotkey('<ctrl>+<home>')


def test_resolve_keeps_pynput_named_keys():
    global_hotkey = pytest.importorskip('autoclicker.global_hotkey')

    for text in ('<ctrl>+<home>', '<ctrl>+<page_up>', '<ctrl>+<shift>+<delete>'):
        config = Config(hotkey=text)
        assert resolve_hotkey(config, global_hotkey.check_hotkey) == parse_hotkey(text)

    config = Config(hotkey='<ctrl>+<banana>')
    assert resolve_hotkey(config, global_hotkey.check_hotkey) == parse_hotkey(default_hotkey())


def test_import_leaves_logging_alone(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: calls.append(kwargs))

    importlib.reload(autoclicker.main)

    assert calls == []
