# tests/utils/test_config_reader.py

import sys

import pytest

from krakenbot.api.errors import ConfigurationError
from krakenbot.utils.config_reader import load_config, resolve_config_path


def test_load_config_reads_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("sweep:\n  pair: USDCUSD\n", encoding="utf-8")
    assert load_config(str(path)) == {"sweep": {"pair": "USDCUSD"}}


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == {}


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "absent.yaml"))


def test_load_config_invalid_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("sweep: [unterminated\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="parsing YAML"):
        load_config(str(path))


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="mapping YAML attendu"):
        load_config(str(path))


def test_resolve_prefers_working_directory(monkeypatch, tmp_path):
    (tmp_path / "config.yaml").write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert resolve_config_path("config.yaml") == "config.yaml"


def test_resolve_falls_back_to_script_directory(monkeypatch, tmp_path):
    project = tmp_path / "bot"
    project.mkdir()
    (project / "config.yaml").write_text("", encoding="utf-8")
    elsewhere = tmp_path / "cron"
    elsewhere.mkdir()

    monkeypatch.chdir(elsewhere)
    monkeypatch.setattr(sys, "argv", [str(project / "start_sweep.py")])

    assert resolve_config_path("config.yaml") == str(project / "config.yaml")


def test_resolve_returns_none_when_absent(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "start_sweep.py")])
    assert resolve_config_path("config.yaml") is None
    assert resolve_config_path(str(tmp_path / "absent.yaml")) is None
