# krakenbot/loaders/config_validator.py

import base64
import binascii
from typing import Any, Dict, List, Mapping

from krakenbot.api.errors import ConfigurationError

REQUIRED_ENV_VARS = ["KRAKEN_PUBLIC_KEY", "KRAKEN_SECRET_KEY", "USD_WITHDRAWAL_KEY"]


def validate_config_values(cfg: Dict[str, Any], env: Mapping[str, str]) -> None:
    """
    Valide config.yaml (normalisée) + variables d'environnement.
    Soulève ConfigurationError avec un message agrégé si la config est invalide.
    """
    errors: List[str] = []

    # ---- env ----
    for var in REQUIRED_ENV_VARS:
        if not (env.get(var) or "").strip():
            errors.append(f"{var} n'est pas défini (fichier .env ou environnement).")

    secret = env.get("KRAKEN_SECRET_KEY") or ""
    if secret:
        try:
            base64.b64decode(secret, validate=True)
        except (binascii.Error, ValueError):
            errors.append("KRAKEN_SECRET_KEY doit être encodé en base64.")

    base_url = env.get("KRAKEN_API_URL") or ""
    if base_url and not base_url.startswith(("http://", "https://")):
        errors.append(f"KRAKEN_API_URL invalide : {base_url!r}")

    minimum = env.get("MINIMUM_WITHDRAWAL_USD") or ""
    if minimum and not _is_decimal_string(minimum):
        errors.append(f"MINIMUM_WITHDRAWAL_USD doit être un montant décimal positif (actuel: {minimum!r}).")

    # ---- api ----
    api = cfg.get("api", {})
    _require_type("api.timeout_seconds", api.get("timeout_seconds"), (int, float), errors, positive=True)
    audit_file = api.get("audit_log_file")
    if audit_file is not None:
        _require_type("api.audit_log_file", audit_file, str, errors, non_empty=True)

    # ---- sweep ----
    sweep = cfg.get("sweep", {})
    for key in ("sell_asset", "pair", "fiat_balance_asset", "withdraw_asset"):
        _require_type(f"sweep.{key}", sweep.get(key), str, errors, non_empty=True)
    _require_type("sweep.sell_scale", sweep.get("sell_scale"), int, errors, min_value=0)
    _require_type("sweep.fiat_scale", sweep.get("fiat_scale"), int, errors, min_value=0)
    _require_type("sweep.settlement_delay_seconds", sweep.get("settlement_delay_seconds"), (int, float), errors, min_value=0)

    # ---- trading ----
    _require_type("trading.dry_run", cfg.get("trading", {}).get("dry_run"), bool, errors)

    if errors:
        raise ConfigurationError("❌ Configuration invalide :\n- " + "\n- ".join(errors))


# -------------------------
# Helpers
# -------------------------

def _is_decimal_string(value: str) -> bool:
    whole, dot, fraction = value.strip().partition(".")
    if not whole and not fraction:
        return False
    return (whole == "" or whole.isdigit()) and (fraction == "" or fraction.isdigit())


def _require_type(name: str, value: Any, expected_type, errors: List[str],
                  non_empty: bool = False, positive: bool = False,
                  min_value: float | int | None = None) -> None:
    # bool est un int : on le refuse pour les champs numériques
    if isinstance(value, bool) and expected_type is not bool:
        errors.append(f"{name} doit être de type {expected_type} (actuel: bool).")
        return
    if not isinstance(value, expected_type):
        errors.append(f"{name} doit être de type {expected_type} (actuel: {type(value).__name__}).")
        return
    if non_empty and isinstance(value, str) and not value.strip():
        errors.append(f"{name} ne doit pas être vide.")
    if positive and isinstance(value, (int, float)) and value <= 0:
        errors.append(f"{name} doit être > 0.")
    if min_value is not None and isinstance(value, (int, float)) and value < min_value:
        errors.append(f"{name} doit être ≥ {min_value}.")
