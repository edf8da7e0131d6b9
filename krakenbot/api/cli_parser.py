import sys

from krakenbot.api.client import KrakenClient
from krakenbot.api.config import debug_dump_config, load_app_config
from krakenbot.api.errors import ConfigurationError

# Import des handlers
from krakenbot.api.endpoints.balance import run as balance
from krakenbot.api.endpoints.trading import run as add_order
from krakenbot.api.endpoints.withdrawal import run as withdraw
from krakenbot.api.endpoints.withdrawal import run_methods as withdraw_methods
from krakenbot.api.endpoints.system import run_status as system_status
from krakenbot.api.endpoints.system import run_time as server_time

COMMANDS = {
    "balance": balance,
    "addOrder": add_order,
    "withdraw": withdraw,
    "withdrawMethods": withdraw_methods,
    "serverTime": server_time,
    "systemStatus": system_status,
}


def _extract_debug_flag(argv: list) -> tuple[bool, list]:
    """
    Extrait un flag global --debug (où qu'il soit dans la ligne de commande).
    Retourne (debug_enabled, argv_sans_debug)
    """
    cleaned = []
    debug = False
    for a in argv:
        if a == "--debug":
            debug = True
        else:
            cleaned.append(a)
    return debug, cleaned


def dispatch() -> int:
    """
    Dispatch général :
    - supporte le flag global --debug
    - une commande = un appel API, sans retry
    Retourne le code de sortie du process.
    """
    debug, argv = _extract_debug_flag(sys.argv)

    if len(argv) < 2:
        print("❌ Aucune commande spécifiée. Exemple : python main.py balance")
        print("📌 Commandes disponibles :", ", ".join(COMMANDS.keys()))
        return 2

    command = argv[1]
    if command not in COMMANDS:
        print(f"❌ Commande inconnue : '{command}'")
        print("📌 Commandes disponibles :", ", ".join(COMMANDS.keys()))
        return 2

    try:
        app_cfg = load_app_config()
    except ConfigurationError as e:
        print(f"❌ {e}")
        return 1

    if debug:
        print("🪵 DEBUG MODE ACTIVÉ")
        print("argv nettoyé  :", argv)
        print("—— dump config ——")
        print(debug_dump_config(app_cfg))

    # instancie le client ICI pour passer le debug
    client = KrakenClient(
        app_cfg.credentials,
        timeout_seconds=float(app_cfg.api["timeout_seconds"]),
        debug=debug,
    )

    # Remplace sys.argv par argv nettoyé pour les parsers des handlers
    old_argv = sys.argv
    sys.argv = argv
    try:
        COMMANDS[command](client)
    except Exception as e:
        print(f"❌ Erreur dans la commande '{command}': {e}")
        if debug:
            import traceback
            traceback.print_exc()
        return 1
    finally:
        sys.argv = old_argv
    return 0
