# krakenbot/api/config.py
"""
Configuration du bot, chargée une seule fois au démarrage :
- secrets et paramètres sensibles depuis .env / l'environnement (python-dotenv)
- paramètres non sensibles depuis config.yaml (optionnel)
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

# ⚠️ Importer le module (et pas la fonction) pour permettre le monkeypatch des tests
import krakenbot.utils.config_reader as cfg_reader
from krakenbot.loaders.config_validator import validate_config_values
from krakenbot.utils.fixed_point import (
    MINIMUM_USD_WITHDRAWAL,
    USD_SCALE,
    USDC_SCALE,
    FixedPointAmount,
    format_decimal,
)

DEFAULT_BASE_URL = "https://api.kraken.com"
# "10.0000"
DEFAULT_MINIMUM_WITHDRAWAL_USD = format_decimal(MINIMUM_USD_WITHDRAWAL, USD_SCALE)

ENV_VARS = [
    "KRAKEN_PUBLIC_KEY",
    "KRAKEN_SECRET_KEY",
    "KRAKEN_API_URL",
    "MINIMUM_WITHDRAWAL_USD",
    "USD_WITHDRAWAL_KEY",
]


@dataclass(frozen=True)
class Credentials:
    api_key: str
    secret: str = field(repr=False)  # base64, jamais loggé
    base_url: str = DEFAULT_BASE_URL


@dataclass(frozen=True)
class AppConfig:
    credentials: Credentials
    minimum_withdrawal: FixedPointAmount
    withdrawal_key: str
    api: Dict[str, Any]
    sweep: Dict[str, Any]
    trading: Dict[str, Any]
    monitoring: Dict[str, Any]

    @property
    def dry_run(self) -> bool:
        return bool(self.trading.get("dry_run", False))


def _normalize_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """
    Garantit la présence de chaque section avec ses valeurs par défaut.
    """
    cfg = dict(cfg or {})

    api = dict(cfg.get("api") or {})
    api.setdefault("timeout_seconds", 30)
    api.setdefault("audit_log_file", None)
    cfg["api"] = api

    sweep = dict(cfg.get("sweep") or {})
    sweep.setdefault("sell_asset", "USDC")
    sweep.setdefault("sell_scale", USDC_SCALE)
    sweep.setdefault("pair", "USDCUSD")
    sweep.setdefault("fiat_balance_asset", "ZUSD")
    sweep.setdefault("fiat_scale", USD_SCALE)
    sweep.setdefault("withdraw_asset", "USD")
    sweep.setdefault("settlement_delay_seconds", 2)
    cfg["sweep"] = sweep

    trading = dict(cfg.get("trading") or {})
    trading.setdefault("dry_run", False)
    cfg["trading"] = trading

    monitoring = dict(cfg.get("monitoring") or {})
    monitoring.setdefault("json_logs", {"enabled": False})
    monitoring.setdefault("prometheus", {"enabled": False})
    cfg["monitoring"] = monitoring
    return cfg


def read_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    source = os.environ if environ is None else environ
    return {name: (source.get(name) or "").strip() for name in ENV_VARS}


def load_app_config(
    config_path: str = "config.yaml",
    *,
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[str] = None,
) -> AppConfig:
    """
    Charge, valide et assemble la configuration.

    Args:
        config_path: chemin du config.yaml (absent = valeurs par défaut)
        environ: variables à utiliser à la place de os.environ (tests)
        env_file: fichier .env explicite (sinon recherche standard de python-dotenv)

    Raises:
        ConfigurationError: valeur manquante ou invalide (message agrégé).
    """
    if environ is None:
        load_dotenv(env_file)

    resolved = cfg_reader.resolve_config_path(config_path)
    if resolved is not None:
        raw = cfg_reader.load_config(resolved)
        logging.info(f"[Config] YAML chargé : {resolved}")
    else:
        logging.warning(f"[Config] {config_path} introuvable, valeurs par défaut utilisées")
        raw = {}

    cfg = _normalize_config(raw)
    env = read_env(environ)
    validate_config_values(cfg, env)

    fiat_scale = cfg["sweep"]["fiat_scale"]
    minimum = env["MINIMUM_WITHDRAWAL_USD"] or DEFAULT_MINIMUM_WITHDRAWAL_USD

    return AppConfig(
        credentials=Credentials(
            api_key=env["KRAKEN_PUBLIC_KEY"],
            secret=env["KRAKEN_SECRET_KEY"],
            base_url=env["KRAKEN_API_URL"] or DEFAULT_BASE_URL,
        ),
        minimum_withdrawal=FixedPointAmount.from_decimal(minimum, fiat_scale),
        withdrawal_key=env["USD_WITHDRAWAL_KEY"],
        api=cfg["api"],
        sweep=cfg["sweep"],
        trading=cfg["trading"],
        monitoring=cfg["monitoring"],
    )


def debug_dump_config(app_cfg: AppConfig) -> Dict[str, Any]:
    """Retourne un dict lisible des infos utiles pour debug global (sans secrets)."""
    return {
        "env": {
            "KRAKEN_API_URL": app_cfg.credentials.base_url,
            "KRAKEN_PUBLIC_KEY_present": bool(app_cfg.credentials.api_key),
            "KRAKEN_SECRET_KEY_present": bool(app_cfg.credentials.secret),
            "MINIMUM_WITHDRAWAL_USD": str(app_cfg.minimum_withdrawal),
        },
        "api": app_cfg.api,
        "sweep": app_cfg.sweep,
        "trading": app_cfg.trading,
    }
