# krakenbot/utils/fixed_point.py
"""
Conversion chaînes décimales <-> entiers en unités de base (virgule fixe).

Toutes les comparaisons de soldes/seuils passent par des entiers Python
(précision arbitraire) pour éviter les erreurs de flottants.
"""

from dataclasses import dataclass

# Échelles natives des actifs utilisés par le sweep
USDC_SCALE = 8
USD_SCALE = 4

# $10.00 à l'échelle 4
MINIMUM_USD_WITHDRAWAL = 100000


def parse_decimal(value: str, scale: int = 8) -> int:
    """
    Convertit une chaîne décimale en unités de base.

    La partie fractionnaire est complétée à droite par des zéros puis tronquée
    à `scale` chiffres (pas d'arrondi).

    Exemples:
        parse_decimal("366.14886400", 8) -> 36614886400
        parse_decimal("0.00000000", 8)   -> 0
        parse_decimal("10.50", 2)        -> 1050
    """
    whole, _, fraction = value.partition(".")
    padded = fraction.ljust(scale, "0")[:scale]
    return int((whole or "0") + padded)


def format_decimal(units: int, scale: int = 8) -> str:
    """
    Inverse de parse_decimal : 36614886400 (scale 8) -> "366.14886400".
    """
    if scale == 0:
        return str(units)
    digits = str(units).rjust(scale + 1, "0")
    whole = digits[:-scale] or "0"
    return f"{whole}.{digits[-scale:]}"


@dataclass(frozen=True)
class FixedPointAmount:
    """Montant en unités de base + échelle implicite."""

    units: int
    scale: int

    @classmethod
    def from_decimal(cls, value: str, scale: int) -> "FixedPointAmount":
        return cls(parse_decimal(value, scale), scale)

    def is_positive(self) -> bool:
        return self.units > 0

    def _check_scale(self, other: "FixedPointAmount") -> None:
        if not isinstance(other, FixedPointAmount):
            raise TypeError(f"Comparaison impossible avec {type(other).__name__}")
        if other.scale != self.scale:
            raise ValueError(
                f"Échelles différentes ({self.scale} vs {other.scale}) : rééchelonner avant de comparer"
            )

    def __lt__(self, other: "FixedPointAmount") -> bool:
        self._check_scale(other)
        return self.units < other.units

    def __le__(self, other: "FixedPointAmount") -> bool:
        self._check_scale(other)
        return self.units <= other.units

    def __gt__(self, other: "FixedPointAmount") -> bool:
        self._check_scale(other)
        return self.units > other.units

    def __ge__(self, other: "FixedPointAmount") -> bool:
        self._check_scale(other)
        return self.units >= other.units

    def __str__(self) -> str:
        return format_decimal(self.units, self.scale)
