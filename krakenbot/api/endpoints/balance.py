import sys
import json
import argparse

from krakenbot.api.types import BalanceResponse

BALANCE_ENDPOINT = "/0/private/Balance"
ZERO_BALANCE = "0.00000000"


def get_balance(client) -> BalanceResponse:
    """
    Soldes de tous les actifs du compte : {"USDC": "366.14886400", "ZUSD": "50.0000", ...}
    """
    return client.private_request(BALANCE_ENDPOINT) or {}


def get_asset_balance(client, asset: str) -> str:
    """
    Solde d'un actif (ex: "USDC", "ZUSD", "XXBT"), "0.00000000" s'il est absent.
    """
    return get_balance(client).get(asset, ZERO_BALANCE)


def run(client):
    """
    Commande CLI :
        python main.py balance [--asset <ASSET>] [--otp <code>]
    """
    parser = argparse.ArgumentParser(description="Soldes du compte Kraken")
    parser.add_argument("--asset", type=str, default=None)
    parser.add_argument("--otp", type=str, default=None)
    args = parser.parse_args(sys.argv[2:])

    balances = client.private_request(BALANCE_ENDPOINT, otp=args.otp) or {}
    if args.asset:
        print(f"💰 {args.asset}: {balances.get(args.asset, ZERO_BALANCE)}")
    else:
        print(json.dumps(balances, indent=2))
