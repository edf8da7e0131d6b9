import sys
import json
import argparse
from typing import Any, Dict, Optional

from krakenbot.api.types import AddOrderResponse

ADD_ORDER_ENDPOINT = "/0/private/AddOrder"


def place_order(client, params: Dict[str, Any]) -> AddOrderResponse:
    """
    Place un ordre. params = {type, ordertype, pair, volume, ...}
    """
    return client.private_request(ADD_ORDER_ENDPOINT, params)


def _market_order(side: str, pair: str, volume: str, validate: bool, userref: Optional[int]) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "type": side,
        "ordertype": "market",
        "pair": pair,
        "volume": volume,
    }
    # Champs optionnels omis s'ils ne sont pas fournis
    if validate:
        params["validate"] = True
    if userref is not None:
        params["userref"] = userref
    return params


def market_sell(client, pair: str, volume: str, *, validate: bool = False, userref: Optional[int] = None) -> AddOrderResponse:
    """
    Ordre market de vente (ex: tout le solde USDC sur la paire USDCUSD).
    validate=True : l'exchange valide l'ordre sans l'exécuter.
    """
    return place_order(client, _market_order("sell", pair, volume, validate, userref))


def market_buy(client, pair: str, volume: str, *, validate: bool = False, userref: Optional[int] = None) -> AddOrderResponse:
    return place_order(client, _market_order("buy", pair, volume, validate, userref))


def run(client):
    """
    Commande CLI :
        python main.py addOrder <side> <pair> <volume> [--validate] [--userref <id>]

    side: buy | sell (ordre market)
    """
    parser = argparse.ArgumentParser(description="Placer un ordre market via l'API Kraken")
    parser.add_argument("side", type=str, choices=["buy", "sell"])
    parser.add_argument("pair", type=str)
    parser.add_argument("volume", type=str)
    parser.add_argument("--validate", action="store_true")
    parser.add_argument("--userref", type=int, default=None)
    args = parser.parse_args(sys.argv[2:])

    order = market_sell if args.side == "sell" else market_buy
    result = order(client, args.pair, args.volume, validate=args.validate, userref=args.userref) or {}

    descr = (result.get("descr") or {}).get("order")
    txids = result.get("txid") or []
    if txids:
        print(f"✅ Ordre placé avec succès. txid={', '.join(txids)}")
    else:
        print("✅ Ordre validé (non exécuté)." if args.validate else "ℹ️  Ordre accepté sans txid.")
    if descr:
        print(f"📦 {descr}")
    if client.debug:
        print(json.dumps(result, indent=2))
