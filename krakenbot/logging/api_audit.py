# krakenbot/logging/api_audit.py

import json
import os
import time
from typing import Any, Dict

# Jamais écrits en clair dans l'audit
MASKED_FIELDS = {"API-Key", "API-Sign", "otp", "secret", "apiKey"}


def mask(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: ("***" if k in MASKED_FIELDS else v) for k, v in d.items()}


class APIAuditLogger:
    """
    Écrit un log NDJSON (une ligne JSON par événement) pour chaque requête/réponse API.
    """

    def __init__(self, path: str):
        self.path = path
        directory = os.path.dirname(path) or "."
        os.makedirs(directory, exist_ok=True)

    def log(self, record: Dict[str, Any]) -> None:
        record = dict(record)
        for key in ("payload", "headers"):
            if isinstance(record.get(key), dict):
                record[key] = mask(record[key])
        record.setdefault("ts_epoch_ms", int(time.time() * 1000))
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
