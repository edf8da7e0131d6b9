# krakenbot/runner/context.py

import logging
from typing import Optional, Tuple

# ⚠️ Importer les modules (et pas les fonctions) pour permettre le monkeypatch des tests
import krakenbot.api.config as app_config

from krakenbot.api.client import KrakenClient
from krakenbot.logging.api_audit import APIAuditLogger
from krakenbot.logging.json_logger import setup_json_logging
from krakenbot.monitoring.metrics import start_metrics
from krakenbot.runner.sweep import SweepSettings


def build_sweep_settings(cfg: app_config.AppConfig, dry_run: Optional[bool] = None) -> SweepSettings:
    sweep = cfg.sweep
    return SweepSettings(
        withdrawal_key=cfg.withdrawal_key,
        minimum_withdrawal=cfg.minimum_withdrawal,
        sell_asset=sweep["sell_asset"],
        sell_scale=int(sweep["sell_scale"]),
        pair=sweep["pair"],
        fiat_balance_asset=sweep["fiat_balance_asset"],
        fiat_scale=int(sweep["fiat_scale"]),
        withdraw_asset=sweep["withdraw_asset"],
        settlement_delay_seconds=float(sweep["settlement_delay_seconds"]),
        dry_run=cfg.dry_run if dry_run is None else dry_run,
    )


def init_context(
    config_path: str = "config.yaml",
    *,
    dry_run: Optional[bool] = None,
) -> Tuple[app_config.AppConfig, KrakenClient, SweepSettings]:
    """
    Initialise le contexte d'exécution d'un sweep :
    - charge et valide la configuration (aucun appel réseau avant)
    - configure logs JSON si activé
    - démarre les métriques Prometheus si activé
    - instancie le client Kraken (un seul, passé explicitement)
    """
    cfg = app_config.load_app_config(config_path)

    # --- JSON logs ---
    jl = cfg.monitoring.get("json_logs") or {}
    setup_json_logging(
        enabled=bool(jl.get("enabled", False)),
        path=jl.get("file", "logs/app.ndjson"),
        level=jl.get("level", "INFO"),
        also_console=bool(jl.get("console", False)),
    )

    # --- Prometheus ---
    prom = cfg.monitoring.get("prometheus") or {}
    start_metrics(
        enabled=bool(prom.get("enabled", False)),
        namespace=prom.get("namespace", "kraken_bot"),
        port=prom.get("port"),
    )

    audit_file = cfg.api.get("audit_log_file")
    audit = APIAuditLogger(audit_file) if audit_file else None

    client = KrakenClient(
        cfg.credentials,
        timeout_seconds=float(cfg.api["timeout_seconds"]),
        audit=audit,
    )
    settings = build_sweep_settings(cfg, dry_run)
    logging.info(f"[Context] Client prêt ({cfg.credentials.base_url}), dry_run={settings.dry_run}")
    return cfg, client, settings
