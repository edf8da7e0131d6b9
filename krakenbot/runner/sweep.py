# krakenbot/runner/sweep.py

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# ⚠️ Importer les modules (et pas les fonctions) pour permettre le monkeypatch des tests
from krakenbot.api.endpoints import balance as balance_api
from krakenbot.api.endpoints import trading as trading_api
from krakenbot.api.endpoints import withdrawal as withdrawal_api
from krakenbot.monitoring.metrics import inc_order, inc_withdrawal, set_balance
from krakenbot.utils.fixed_point import USD_SCALE, USDC_SCALE, FixedPointAmount


class SweepState(Enum):
    CHECKING_SELL_BALANCE = "checking_sell_balance"
    SELLING = "selling"
    CHECKING_WITHDRAW_BALANCE = "checking_withdraw_balance"
    WITHDRAWING = "withdrawing"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SweepSettings:
    withdrawal_key: str
    minimum_withdrawal: FixedPointAmount      # même échelle que fiat_scale
    sell_asset: str = "USDC"
    sell_scale: int = USDC_SCALE
    pair: str = "USDCUSD"
    fiat_balance_asset: str = "ZUSD"
    fiat_scale: int = USD_SCALE
    withdraw_asset: str = "USD"
    settlement_delay_seconds: float = 2.0
    dry_run: bool = False


@dataclass
class SweepReport:
    states: List[SweepState] = field(default_factory=list)
    sell_balance: Optional[FixedPointAmount] = None
    order: Optional[Dict[str, Any]] = None
    fiat_balance: Optional[FixedPointAmount] = None
    withdrawal: Optional[Dict[str, Any]] = None

    def enter(self, state: SweepState) -> None:
        logging.debug(f"[Sweep] -> {state}")
        self.states.append(state)


def run_sweep(client, settings: SweepSettings) -> SweepReport:
    """
    Séquence linéaire, sans retry ni retour arrière :
    1. solde de l'actif à vendre -> virgule fixe
    2. si > 0 : vente market de tout le solde
    3. attente fixe (règlement du trade côté exchange)
    4. solde fiat -> virgule fixe
    5. si >= seuil : retrait de tout le solde vers la destination configurée

    Toute exception interrompt la suite et remonte à l'appelant.
    """
    if settings.minimum_withdrawal.scale != settings.fiat_scale:
        raise ValueError(
            f"Seuil de retrait à l'échelle {settings.minimum_withdrawal.scale}, "
            f"solde fiat à l'échelle {settings.fiat_scale}"
        )

    report = SweepReport()
    prefix = "[DryRun] " if settings.dry_run else ""

    # --- 1) Solde à vendre ---
    report.enter(SweepState.CHECKING_SELL_BALANCE)
    logging.info(f"📊 Vérification du solde {settings.sell_asset}...")
    sell_raw = balance_api.get_asset_balance(client, settings.sell_asset)
    report.sell_balance = FixedPointAmount.from_decimal(sell_raw, settings.sell_scale)
    set_balance(settings.sell_asset, report.sell_balance.units / 10 ** settings.sell_scale)
    logging.info(f"   Solde {settings.sell_asset} : {sell_raw}")

    # --- 2) Vente ---
    if report.sell_balance.is_positive():
        report.enter(SweepState.SELLING)
        logging.info(f"💱 {prefix}Vente de {sell_raw} {settings.sell_asset} ({settings.pair})...")
        try:
            report.order = trading_api.market_sell(
                client, settings.pair, sell_raw, validate=settings.dry_run
            ) or {}
        except Exception:
            inc_order("error")
            raise
        inc_order("validated" if settings.dry_run else "ok")

        txids = report.order.get("txid") or []
        descr = (report.order.get("descr") or {}).get("order")
        if txids:
            logging.info(f"   ✅ Ordre placé, txid={', '.join(txids)}")
        if descr:
            logging.info(f"   Ordre : {descr}")
    else:
        logging.info(f"   ℹ️  Aucun solde {settings.sell_asset} à vendre")

    # --- 3) Attente de règlement (bloquante, non annulable) ---
    logging.info(f"   ℹ️  Attente de {settings.settlement_delay_seconds}s avant de relire le solde fiat...")
    time.sleep(settings.settlement_delay_seconds)

    # --- 4) Solde fiat ---
    report.enter(SweepState.CHECKING_WITHDRAW_BALANCE)
    fiat_raw = balance_api.get_asset_balance(client, settings.fiat_balance_asset)
    report.fiat_balance = FixedPointAmount.from_decimal(fiat_raw, settings.fiat_scale)
    set_balance(settings.fiat_balance_asset, report.fiat_balance.units / 10 ** settings.fiat_scale)
    logging.info(f"💵 Solde {settings.fiat_balance_asset} : {fiat_raw}")

    # --- 5) Retrait ---
    if report.fiat_balance >= settings.minimum_withdrawal:
        report.enter(SweepState.WITHDRAWING)
        if settings.dry_run:
            logging.info(f"🏦 {prefix}Retrait de {fiat_raw} {settings.withdraw_asset} non envoyé")
            inc_withdrawal("skipped")
        else:
            logging.info(f"🏦 Retrait de {fiat_raw} {settings.withdraw_asset} vers '{settings.withdrawal_key}'...")
            try:
                report.withdrawal = withdrawal_api.withdraw(
                    client, settings.withdraw_asset, settings.withdrawal_key, fiat_raw
                ) or {}
            except Exception:
                inc_withdrawal("error")
                raise
            inc_withdrawal("ok")
            logging.info(f"   ✅ Retrait initié, refid={report.withdrawal.get('refid')}")
    else:
        logging.info(
            f"   ℹ️  Solde sous le seuil minimum de retrait ({settings.minimum_withdrawal} {settings.withdraw_asset})"
        )

    report.enter(SweepState.DONE)
    return report
