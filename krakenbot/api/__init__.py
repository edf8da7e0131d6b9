# krakenbot/api/__init__.py

from .auth import encode_payload, generate_signature
from .client import KrakenClient
from .config import AppConfig, Credentials, load_app_config
from .errors import ApiError, ConfigurationError, KrakenBotError, SigningError, TransportError
from .nonce import NonceGenerator

__all__ = [
    "encode_payload",
    "generate_signature",
    "KrakenClient",
    "AppConfig",
    "Credentials",
    "load_app_config",
    "ApiError",
    "ConfigurationError",
    "KrakenBotError",
    "SigningError",
    "TransportError",
    "NonceGenerator",
]
