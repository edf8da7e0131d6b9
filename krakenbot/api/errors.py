# krakenbot/api/errors.py
"""
Exceptions du bot. Toutes remontent jusqu'à start_sweep.main() qui logue
et termine le process avec un code non nul.
"""

from typing import List, Optional


class KrakenBotError(Exception):
    """Base de toutes les erreurs du bot"""


class ConfigurationError(KrakenBotError, ValueError):
    """Identifiants, clé de retrait ou paramètres manquants/invalides"""


class SigningError(KrakenBotError, ValueError):
    """Payload sans nonce ou type de données invalide"""


class TransportError(KrakenBotError, ConnectionError):
    """Statut HTTP hors 2xx (ou échec réseau, status_code=None)"""

    def __init__(self, status_code: Optional[int], body: str, reason: str = ""):
        self.status_code = status_code
        self.body = body
        self.reason = reason
        if status_code is None:
            msg = f"Kraken API transport error: {body}"
        else:
            status = f"{status_code} {reason}".strip()
            msg = f"Kraken API HTTP error: {status} - {body}"
        super().__init__(msg)


class ApiError(KrakenBotError):
    """Erreurs renvoyées par l'exchange dans l'enveloppe {error, result}"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(f"Kraken API error: {', '.join(self.errors)}")
