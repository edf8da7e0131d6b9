# tests/logging/test_api_audit.py

import json

from krakenbot.logging.api_audit import APIAuditLogger


def test_audit_appends_lines_and_masks(tmp_path):
    path = tmp_path / "nested" / "audit.ndjson"
    audit = APIAuditLogger(str(path))

    audit.log({"event": "request", "endpoint": "/0/private/Balance", "payload": {"nonce": 1, "otp": "42"}})
    audit.log({"event": "response", "endpoint": "/0/private/Balance", "response": {"error": []}})

    lines = [json.loads(l) for l in path.read_text(encoding="utf-8").splitlines()]
    assert [r["event"] for r in lines] == ["request", "response"]
    assert lines[0]["payload"] == {"nonce": 1, "otp": "***"}
    assert all("ts_epoch_ms" in r for r in lines)
