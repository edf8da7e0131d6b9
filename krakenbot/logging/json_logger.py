# krakenbot/logging/json_logger.py

import json
import logging
import os
from typing import Any, Dict, Optional

from krakenbot.logging.api_audit import MASKED_FIELDS

SENSITIVE_KEYS = MASKED_FIELDS | {"api_key", "withdrawal_key", "key"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "timestamp": self.formatTime(record, self.datefmt),
        }
        # Extra transmis via logger.info(..., extra={"extra": {...}})
        if hasattr(record, "extra") and isinstance(record.extra, dict):  # type: ignore[attr-defined]
            payload.update(self._mask(record.extra))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)

    def _mask(self, d: Dict[str, Any]) -> Dict[str, Any]:
        # Récursif : les payloads Kraken (headers, params de retrait) sont imbriqués
        return {
            k: "***" if k in SENSITIVE_KEYS else (self._mask(v) if isinstance(v, dict) else v)
            for k, v in d.items()
        }


def setup_json_logging(
    *,
    enabled: bool,
    path: str,
    level: str = "INFO",
    also_console: bool = False,
) -> Optional[logging.Logger]:
    """
    Configure le root logger pour écrire en NDJSON en plus des handlers existants.
    - N'enlève que le FileHandler pointant vers 'path' (pas les autres).
    - Optionnel: ajoute un StreamHandler (console) au format JSON.

    Args:
        enabled: active/désactive le logging JSON.
        path: chemin du fichier NDJSON.
        level: niveau ("DEBUG" / "INFO" / "WARNING" / "ERROR").
        also_console: si True, ajoute un StreamHandler JSON sur la console.

    Returns:
        Logger "krakenbot" si activé, sinon None.
    """
    if not enabled:
        return None

    path = os.path.abspath(os.fspath(path))
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

    formatter = JsonFormatter()
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [
        h
        for h in root.handlers
        if not (isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", None) == path)
    ]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    logger = logging.getLogger("krakenbot")
    logger.info("JSON logging enabled", extra={"extra": {"path": path, "level": level}})
    file_handler.flush()
    return logger
