# krakenbot/api/auth.py
"""
Signature des requêtes privées Kraken (API-Sign).

    API-Sign = base64(HMAC-SHA512(base64decode(secret),
                                  path + SHA256(nonce + postdata)))

Le postdata signé doit être octet pour octet le corps HTTP envoyé : le client
et la signature passent tous deux par encode_payload().
"""

import base64
import binascii
import hashlib
import hmac
import json
from typing import Any, Mapping, Union
from urllib.parse import urlencode

from krakenbot.api.errors import SigningError


def _form_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        # clé répétée : txid=A&txid=B
        return [_form_value(item) for item in value]
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_payload(payload: Mapping[str, Any]) -> str:
    """
    Sérialisation application/x-www-form-urlencoded (ordre d'insertion conservé).
    """
    return urlencode([(key, _form_value(value)) for key, value in payload.items()], doseq=True)


def decode_secret(secret: str) -> bytes:
    try:
        return base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SigningError(f"Secret API invalide (base64 attendu) : {e}") from None


def generate_signature(url_path: str, data: Union[str, Mapping[str, Any]], secret: str) -> str:
    """
    Calcule la signature API-Sign.

    Args:
        url_path: chemin de l'endpoint (ex: "/0/private/Balance")
        data: payload (mapping avec "nonce") ou chaîne JSON contenant "nonce"
        secret: secret API encodé en base64

    Returns:
        Signature HMAC-SHA512 encodée en base64.

    Raises:
        SigningError: nonce absent, type de données invalide ou secret illisible.
    """
    if isinstance(data, str):
        try:
            parsed = json.loads(data)
        except json.JSONDecodeError as e:
            raise SigningError(f"Données JSON invalides : {e}") from None
        if not isinstance(parsed, dict) or "nonce" not in parsed:
            raise SigningError("Nonce is required in data")
        encoded = str(parsed["nonce"]) + data
    elif isinstance(data, Mapping):
        if "nonce" not in data:
            raise SigningError("Nonce is required in data object")
        encoded = str(data["nonce"]) + encode_payload(data)
    else:
        raise SigningError("Invalid data type: expected string or object")

    digest = hashlib.sha256(encoded.encode("utf-8")).digest()
    message = url_path.encode("utf-8") + digest

    mac = hmac.new(decode_secret(secret), message, hashlib.sha512)
    return base64.b64encode(mac.digest()).decode("ascii")
