import builtins
import importlib
import logging
import os
import sys
import types
from pathlib import Path

import pytest


def _reload_config():
    sys.modules.pop("rawfetch.config", None)
    return importlib.import_module("rawfetch.config")


def test_missing_dotenv_logs_warning(monkeypatch, caplog):
    orig_import = builtins.__import__

    def fake_import(name, globals=None, locals=None, fromlist=(), level=0):
        if name == "dotenv" or name.startswith("dotenv."):
            raise ImportError
        return orig_import(name, globals, locals, fromlist, level)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    caplog.set_level(logging.WARNING)
    cfg = _reload_config()
    assert "python-dotenv not available" in caplog.text

    # environment fallback works
    monkeypatch.setenv("USER_AGENT", "X-Agent")
    cfg = _reload_config()
    assert cfg.get_str_env("USER_AGENT", "rawfetch/0.1") == "X-Agent"


def test_dotenv_present_but_fails_to_load(monkeypatch, tmp_path):
    tmp_path.joinpath(".env").write_text("USER_AGENT=FromFile")
    monkeypatch.chdir(tmp_path)

    fake = types.SimpleNamespace(load_dotenv=lambda: False)
    monkeypatch.setitem(sys.modules, "dotenv", fake)
    with pytest.raises(RuntimeError):
        _reload_config()


def test_dotenv_loads_sets_variables(monkeypatch, tmp_path):
    tmp_path.joinpath(".env").write_text("USER_AGENT=DotenvAgent")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("USER_AGENT", raising=False)

    def fake_load():
        # emulate dotenv behavior: read .env and set os.environ
        p = Path(".env")
        for line in p.read_text().splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                monkeypatch.setenv(k, v)
        return True

    fake = types.SimpleNamespace(load_dotenv=fake_load)
    monkeypatch.setitem(sys.modules, "dotenv", fake)
    cfg = _reload_config()
    assert cfg.get_str_env("USER_AGENT", "rawfetch/0.1") == "DotenvAgent"


def test_typed_env_helpers(monkeypatch):
    cfg = _reload_config()
    monkeypatch.setenv("RF_INT", "12")
    monkeypatch.setenv("RF_BAD_INT", "twelve")
    monkeypatch.setenv("RF_FLOAT", "2.5")
    monkeypatch.setenv("RF_BOOL", "Yes")
    monkeypatch.setenv("RF_CSV", "a, b,,c ")
    monkeypatch.setenv("RF_BLANK", "  ")
    assert cfg.get_int_env("RF_INT", 1) == 12
    assert cfg.get_int_env("RF_BAD_INT", 1) == 1
    assert cfg.get_float_env("RF_FLOAT", 1.0) == 2.5
    assert cfg.get_bool_env("RF_BOOL", False) is True
    assert cfg.get_bool_env("RF_BLANK", True) is True
    assert cfg.get_csv_env("RF_CSV", ()) == ("a", "b", "c")
    assert cfg.get_optional_str_env("RF_BLANK") is None
    assert cfg.get_bool_env("RF_BAD_INT", False) is False
