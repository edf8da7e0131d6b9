# krakenbot/api/types.py
"""Formes des réponses Kraken utilisées par le bot."""

from typing import Any, Dict, List, Optional, TypedDict

# asset -> solde décimal (ex: {"USDC": "366.14886400", "ZUSD": "50.0000"})
BalanceResponse = Dict[str, str]


class ApiEnvelope(TypedDict, total=False):
    error: List[str]
    result: Any


class OrderDescription(TypedDict, total=False):
    order: str
    close: str


class AddOrderResponse(TypedDict, total=False):
    descr: OrderDescription
    txid: List[str]


class WithdrawResponse(TypedDict):
    refid: str


class WithdrawMethod(TypedDict, total=False):
    asset: str
    method: str
    network: Optional[str]
    minimum: str


class ServerTime(TypedDict):
    unixtime: int
    rfc1123: str


class SystemStatus(TypedDict):
    status: str
    timestamp: str
