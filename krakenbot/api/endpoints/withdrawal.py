import sys
import json
import argparse
from typing import Any, Dict, List, Optional

from krakenbot.api.types import WithdrawMethod, WithdrawResponse

WITHDRAW_ENDPOINT = "/0/private/Withdraw"
WITHDRAW_METHODS_ENDPOINT = "/0/private/WithdrawMethods"


def get_withdrawal_methods(client, asset: Optional[str] = None) -> List[WithdrawMethod]:
    """
    Méthodes de retrait disponibles (toutes, ou pour un actif donné).
    """
    params = {"asset": asset} if asset else {}
    return client.private_request(WITHDRAW_METHODS_ENDPOINT, params) or []


def withdraw(client, asset: str, key: str, amount: str, **options: Any) -> WithdrawResponse:
    """
    Retire `amount` de `asset` vers la destination nommée `key` (configurée sur le compte).
    options : champs additionnels (address, max_fee, ...), ignorés si None.
    """
    params: Dict[str, Any] = {"asset": asset, "key": key, "amount": amount}
    params.update({k: v for k, v in options.items() if v is not None})
    return client.private_request(WITHDRAW_ENDPOINT, params)


def run_methods(client):
    """
    Commande CLI :
        python main.py withdrawMethods [--asset <ASSET>]
    """
    parser = argparse.ArgumentParser(description="Méthodes de retrait Kraken")
    parser.add_argument("--asset", type=str, default=None)
    args = parser.parse_args(sys.argv[2:])

    methods = get_withdrawal_methods(client, args.asset)
    if not methods:
        print("ℹ️  Aucune méthode de retrait.")
        return
    for m in methods:
        print(f"🏦 {m.get('asset')} | {m.get('method')} | min={m.get('minimum', '?')}")


def run(client):
    """
    Commande CLI :
        python main.py withdraw <asset> <key> <amount> [--max-fee <val>]
    """
    parser = argparse.ArgumentParser(description="Retrait via l'API Kraken")
    parser.add_argument("asset", type=str)
    parser.add_argument("key", type=str)
    parser.add_argument("amount", type=str)
    parser.add_argument("--max-fee", dest="max_fee", type=str, default=None)
    args = parser.parse_args(sys.argv[2:])

    result = withdraw(client, args.asset, args.key, args.amount, max_fee=args.max_fee) or {}
    print(f"✅ Retrait initié. refid={result.get('refid')}")
    if client.debug:
        print(json.dumps(result, indent=2))
