# krakenbot/utils/config_reader.py

import os
import sys
from typing import Any, Dict, Optional

import yaml

from krakenbot.api.errors import ConfigurationError


def resolve_config_path(config_path: str = "config.yaml") -> Optional[str]:
    """
    Localise le config.yaml : tel quel (absolu ou relatif au répertoire courant),
    sinon à côté du script lancé (main.py / start_sweep.py).

    Returns:
        str | None: chemin existant, ou None si introuvable.
    """
    if os.path.isabs(config_path) or os.path.exists(config_path):
        return config_path if os.path.exists(config_path) else None

    script_dir = os.path.dirname(os.path.abspath(sys.argv[0])) if sys.argv and sys.argv[0] else ""
    candidate = os.path.join(script_dir, config_path)
    return candidate if script_dir and os.path.exists(candidate) else None


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """
    Charge et retourne le contenu du fichier de configuration YAML.

    Args:
        config_path (str): Chemin vers le fichier YAML.

    Returns:
        dict: Configuration chargée ({} si le fichier est vide).

    Raises:
        FileNotFoundError: Si le fichier n'existe pas.
        ConfigurationError: YAML invalide, ou racine qui n'est pas un mapping.
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"❌ Fichier de configuration non trouvé : {config_path}")

    with open(config_path, "r", encoding="utf-8") as file:
        try:
            data = yaml.safe_load(file) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"❌ Erreur lors du parsing YAML ({config_path}) : {e}") from None

    if not isinstance(data, dict):
        raise ConfigurationError(f"❌ {config_path} : mapping YAML attendu, reçu {type(data).__name__}")
    return data
