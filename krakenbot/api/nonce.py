# krakenbot/api/nonce.py

import time
from typing import Callable, Optional


def _now_ms() -> int:
    return int(time.time() * 1000)


class NonceGenerator:
    """
    Nonce strictement croissant pour une instance de client.

    Initialisé sur l'horloge murale (ms). Si l'horloge n'a pas avancé depuis le
    dernier nonce, on incrémente de 1 au lieu de réutiliser la valeur.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or _now_ms
        self.last = self._clock()

    def next(self) -> int:
        now = self._clock()
        if now > self.last:
            self.last = now
        else:
            self.last += 1
        return self.last
