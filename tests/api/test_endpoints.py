# tests/api/test_endpoints.py

import sys

from krakenbot.api.endpoints import balance, system, trading, withdrawal


class FakeClient:
    debug = False

    def __init__(self, private=None, public=None):
        self.private = private or {}
        self.public = public or {}
        self.calls = []

    def private_request(self, endpoint, body=None, otp=None):
        self.calls.append(("POST", endpoint, dict(body or {}), otp))
        return self.private.get(endpoint)

    def public_request(self, endpoint, params=None):
        self.calls.append(("GET", endpoint, dict(params or {}), None))
        return self.public.get(endpoint)


def test_get_asset_balance_present_and_missing():
    fc = FakeClient(private={"/0/private/Balance": {"USDC": "366.14886400", "ZUSD": "50.0000"}})
    assert balance.get_asset_balance(fc, "USDC") == "366.14886400"
    assert balance.get_asset_balance(fc, "XXBT") == "0.00000000"
    assert fc.calls[0][:3] == ("POST", "/0/private/Balance", {})


def test_market_sell_params():
    fc = FakeClient(private={"/0/private/AddOrder": {"descr": {"order": "sell 100 USDCUSD @ market"}, "txid": ["O1"]}})
    res = trading.market_sell(fc, "USDCUSD", "100.00000000")
    assert res["txid"] == ["O1"]
    _, endpoint, body, _ = fc.calls[0]
    assert endpoint == "/0/private/AddOrder"
    assert body == {"type": "sell", "ordertype": "market", "pair": "USDCUSD", "volume": "100.00000000"}


def test_market_buy_with_options():
    fc = FakeClient()
    trading.market_buy(fc, "USDCUSD", "5", validate=True, userref=7)
    body = fc.calls[0][2]
    assert body["type"] == "buy"
    assert body["validate"] is True
    assert body["userref"] == 7


def test_withdraw_params_and_none_options_dropped():
    fc = FakeClient(private={"/0/private/Withdraw": {"refid": "AGBSO6T-UFMTTQ-I7KGS6"}})
    res = withdrawal.withdraw(fc, "USD", "Mercury", "50.0000", max_fee=None, address="abc")
    assert res == {"refid": "AGBSO6T-UFMTTQ-I7KGS6"}
    assert fc.calls[0][1:3] == ("/0/private/Withdraw", {"asset": "USD", "key": "Mercury", "amount": "50.0000", "address": "abc"})


def test_withdrawal_methods_optional_asset():
    fc = FakeClient(private={"/0/private/WithdrawMethods": [{"asset": "USD", "method": "Bank"}]})
    assert withdrawal.get_withdrawal_methods(fc) == [{"asset": "USD", "method": "Bank"}]
    withdrawal.get_withdrawal_methods(fc, "USD")
    assert fc.calls[0][2] == {}
    assert fc.calls[1][2] == {"asset": "USD"}


def test_public_endpoints():
    fc = FakeClient(public={
        "/0/public/Time": {"unixtime": 1688669448, "rfc1123": "Thu, 06 Jul 23 18:50:48 +0000"},
        "/0/public/SystemStatus": {"status": "online", "timestamp": "2023-07-06T18:52:00Z"},
    })
    assert system.get_server_time(fc)["unixtime"] == 1688669448
    assert system.get_system_status(fc)["status"] == "online"
    assert all(c[0] == "GET" for c in fc.calls)


def test_add_order_command(monkeypatch, capsys):
    fc = FakeClient(private={"/0/private/AddOrder": {"descr": {"order": "sell 10 USDCUSD @ market"}}})
    monkeypatch.setattr(sys, "argv", ["main.py", "addOrder", "sell", "USDCUSD", "10", "--validate"])

    trading.run(fc)

    out = capsys.readouterr().out
    assert "validé" in out
    assert fc.calls[0][2]["validate"] is True


def test_balance_command_single_asset(monkeypatch, capsys):
    fc = FakeClient(private={"/0/private/Balance": {"ZUSD": "12.3400"}})
    monkeypatch.setattr(sys, "argv", ["main.py", "balance", "--asset", "ZUSD"])

    balance.run(fc)

    assert "ZUSD: 12.3400" in capsys.readouterr().out
