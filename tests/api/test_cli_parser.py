# tests/api/test_cli_parser.py

import sys

from krakenbot.api import cli_parser
from krakenbot.api.errors import ConfigurationError


def test_unknown_command(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["main.py", "nope"])
    assert cli_parser.dispatch() == 2
    assert "Commande inconnue" in capsys.readouterr().out


def test_missing_command(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["main.py", "--debug"])
    assert cli_parser.dispatch() == 2


def test_dispatch_builds_client_and_strips_debug(monkeypatch):
    seen = {}

    class FakeCfg:
        credentials = "CREDS"
        api = {"timeout_seconds": 5}

    class FakeClient:
        def __init__(self, credentials, timeout_seconds, debug):
            seen["client"] = (credentials, timeout_seconds, debug)

    def fake_handler(client):
        seen["argv"] = list(sys.argv)

    monkeypatch.setattr(cli_parser, "load_app_config", lambda: FakeCfg())
    monkeypatch.setattr(cli_parser, "debug_dump_config", lambda cfg: {})
    monkeypatch.setattr(cli_parser, "KrakenClient", FakeClient)
    monkeypatch.setitem(cli_parser.COMMANDS, "balance", fake_handler)
    monkeypatch.setattr(sys, "argv", ["main.py", "balance", "--debug", "--asset", "USDC"])

    assert cli_parser.dispatch() == 0
    assert seen["client"] == ("CREDS", 5.0, True)
    assert seen["argv"] == ["main.py", "balance", "--asset", "USDC"]
    assert sys.argv == ["main.py", "balance", "--debug", "--asset", "USDC"]


def test_handler_error_returns_1(monkeypatch, capsys):
    class FakeCfg:
        credentials = "CREDS"
        api = {"timeout_seconds": 5}

    def failing(client):
        raise RuntimeError("Kraken API error: EGeneral:Permission denied")

    monkeypatch.setattr(cli_parser, "load_app_config", lambda: FakeCfg())
    monkeypatch.setattr(cli_parser, "KrakenClient", lambda *a, **k: object())
    monkeypatch.setitem(cli_parser.COMMANDS, "balance", failing)
    monkeypatch.setattr(sys, "argv", ["main.py", "balance"])

    assert cli_parser.dispatch() == 1
    assert "Permission denied" in capsys.readouterr().out


def test_invalid_config_returns_1_without_client(monkeypatch, capsys):
    def bad_config():
        raise ConfigurationError("Configuration invalide :\n - KRAKEN_SECRET_KEY manquant")

    def no_client(*a, **k):
        raise AssertionError("aucun client ne doit être créé")

    monkeypatch.setattr(cli_parser, "load_app_config", bad_config)
    monkeypatch.setattr(cli_parser, "KrakenClient", no_client)
    monkeypatch.setattr(sys, "argv", ["main.py", "balance"])

    assert cli_parser.dispatch() == 1
    assert "KRAKEN_SECRET_KEY" in capsys.readouterr().out
