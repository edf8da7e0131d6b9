# krakenbot/api/client.py

import logging
import time
from typing import Any, Dict, Mapping, Optional

import requests

from krakenbot.api.auth import encode_payload, generate_signature
from krakenbot.api.config import Credentials
from krakenbot.api.errors import ApiError, ConfigurationError, TransportError
from krakenbot.api.nonce import NonceGenerator
from krakenbot.api.types import ApiEnvelope
from krakenbot.logging.api_audit import APIAuditLogger
from krakenbot.monitoring.metrics import observe_api_latency

DEFAULT_TIMEOUT_SECONDS = 30.0


class KrakenClient:
    """
    Client REST Kraken : signature, nonce et dépaquetage de l'enveloppe {error, result}.

    Une instance = un flux de nonces. Le contrat suppose qu'un seul client
    actif émet des requêtes sur le compte à un instant donné.

    Exemple:
        client = KrakenClient(Credentials(api_key="...", secret="..."))
        balance = client.private_request("/0/private/Balance")
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        audit: Optional[APIAuditLogger] = None,
        nonce_generator: Optional[NonceGenerator] = None,
        debug: bool = False,
    ):
        if not credentials.api_key:
            raise ConfigurationError("API key is required")
        if not credentials.secret:
            raise ConfigurationError("Secret key is required")

        self.credentials = credentials
        self.base_url = credentials.base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.audit = audit
        self.nonces = nonce_generator or NonceGenerator()
        self.debug = debug

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def private_request(
        self,
        endpoint: str,
        body: Optional[Mapping[str, Any]] = None,
        otp: Optional[str] = None,
    ) -> Any:
        """
        Requête authentifiée (POST form-encoded) vers un endpoint privé.

        Raises:
            SigningError: payload impossible à signer.
            TransportError: statut HTTP hors 2xx ou échec réseau.
            ApiError: l'exchange renvoie des erreurs dans l'enveloppe.
        """
        payload: Dict[str, Any] = dict(body or {})
        payload["nonce"] = self.nonces.next()
        if otp:
            payload["otp"] = otp

        signature = generate_signature(endpoint, payload, self.credentials.secret)
        headers = {
            "API-Key": self.credentials.api_key,
            "API-Sign": signature,
            "Content-Type": "application/x-www-form-urlencoded",
        }
        # Même chaîne que celle signée
        post_data = encode_payload(payload)

        self._audit({"event": "request", "method": "POST", "endpoint": endpoint, "payload": payload})
        if self.debug:
            logging.debug(f"[Kraken] POST {endpoint} nonce={payload['nonce']}")

        t0 = time.perf_counter()
        try:
            response = requests.post(
                self.url_for(endpoint),
                data=post_data,
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            raise self._network_error(endpoint, e, time.perf_counter() - t0) from e
        return self._unwrap(endpoint, response, time.perf_counter() - t0)

    def public_request(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Requête publique (GET, sans signature ni nonce). Même contrat d'erreurs.
        """
        self._audit({"event": "request", "method": "GET", "endpoint": endpoint, "payload": dict(params or {})})

        t0 = time.perf_counter()
        try:
            response = requests.get(
                self.url_for(endpoint),
                params=dict(params or {}),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            raise self._network_error(endpoint, e, time.perf_counter() - t0) from e
        return self._unwrap(endpoint, response, time.perf_counter() - t0)

    def _network_error(self, endpoint: str, error: Exception, elapsed: float) -> TransportError:
        observe_api_latency(endpoint, "error", elapsed)
        self._audit({"event": "error", "endpoint": endpoint, "error": str(error)})
        logging.warning(f"[Kraken] Échec réseau sur {endpoint}: {error}")
        return TransportError(None, str(error))

    def _unwrap(self, endpoint: str, response: Any, elapsed: float) -> Any:
        status = response.status_code
        observe_api_latency(endpoint, str(status), elapsed)

        if not 200 <= status < 300:
            self._audit({"event": "error", "endpoint": endpoint, "status": status, "error": response.text})
            raise TransportError(status, response.text, getattr(response, "reason", "") or "")

        try:
            data = response.json()
        except ValueError:
            self._audit({"event": "error", "endpoint": endpoint, "status": status, "error": "invalid json"})
            raise TransportError(status, f"Réponse non JSON : {response.text}") from None

        self._audit({"event": "response", "endpoint": endpoint, "status": status, "response": data})

        if not isinstance(data, dict):
            raise TransportError(status, f"Enveloppe inattendue : {response.text}")

        envelope: ApiEnvelope = data
        errors = envelope.get("error") or []
        if isinstance(errors, str):
            errors = [errors]
        if errors:
            # Résultat ignoré dès qu'il y a une erreur
            raise ApiError(errors)
        return envelope.get("result")

    def _audit(self, record: Dict[str, Any]) -> None:
        if self.audit is not None:
            self.audit.log(record)
