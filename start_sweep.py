#!/usr/bin/env python3
"""
Start Sweep Runner

- Charge et valide la configuration (.env + config.yaml)
- Vend tout le solde USDC contre USD (si > 0)
- Attend le règlement puis retire le solde USD (si >= seuil minimum)

Usage:
  python start_sweep.py
  python start_sweep.py --validate-only
  python start_sweep.py --dry-run
  python start_sweep.py --config other.yaml
"""

import argparse
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler()],
)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Kraken sweep - vente USDC puis retrait USD")
    parser.add_argument("--config", default="config.yaml", help="Chemin du config.yaml.")
    parser.add_argument("--validate-only", action="store_true", help="Valide la config et stoppe.")
    parser.add_argument("--dry-run", action="store_true", help="Ordre en validate=true, aucun retrait.")
    args = parser.parse_args(argv)

    # Imports tardifs : le logging est configuré avant
    from krakenbot.api.config import load_app_config
    from krakenbot.monitoring.metrics import push_metrics
    from krakenbot.runner.context import init_context
    from krakenbot.runner.sweep import run_sweep

    if args.validate_only:
        print("🔍 Validation de la configuration...")
        load_app_config(args.config)
        print("✅ Configuration OK.")
        return 0

    cfg, client, settings = init_context(args.config, dry_run=True if args.dry_run else None)

    logging.info("🤖 Kraken sweep démarré")
    try:
        report = run_sweep(client, settings)
    finally:
        prom = cfg.monitoring.get("prometheus") or {}
        try:
            push_metrics(gateway=prom.get("pushgateway"), job=prom.get("job", "kraken_bot"))
        except Exception as e:
            # L'erreur du sweep (s'il y en a une) reste celle qui remonte
            logging.warning(f"[Metrics] push échoué : {e}")

    logging.info(f"✨ Sweep terminé : {' -> '.join(str(s) for s in report.states)}")
    return 0


def run(argv=None) -> int:
    """Exécute main() et traduit toute erreur en code de sortie du process."""
    try:
        return main(argv)
    except KeyboardInterrupt:
        print("\n🛑 Arrêt demandé par l'utilisateur.")
        return 130
    except Exception as e:
        logging.error(f"❌ Erreur critique ({type(e).__name__}): {e}")
        return 1


if __name__ == "__main__":
    sys.exit(run())
