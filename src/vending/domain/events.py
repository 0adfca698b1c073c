"""
Events du domaine.

Les events représentent des faits qui se sont produits sur une machine.
Ils sont immuables (frozen) et portent tous l'identifiant de la machine
concernée. Chaque variante expose une étiquette `type` au niveau de la
classe : c'est elle qui sert de clé de routage dans l'EventBus.

L'ensemble des variantes est fermé : Sale, Refill, LowStockWarning,
StockLevelOk. `AnyEvent` les réunit pour les annotations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


class InvalidQuantity(ValueError):
    """Levée quand une vente ou un réapprovisionnement a une quantité non positive."""
    pass


@dataclass(frozen=True)
class Event:
    """Classe de base pour tous les events du domaine."""

    type: ClassVar[str] = "event"

    machine_id: str


@dataclass(frozen=True)
class _QuantityEvent(Event):
    quantity: int

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise InvalidQuantity(f"Quantité non entière : {self.quantity!r}")
        if self.quantity <= 0:
            raise InvalidQuantity(
                f"La quantité doit être positive ({self.type}, machine {self.machine_id}) : "
                f"{self.quantity}"
            )


@dataclass(frozen=True)
class Sale(_QuantityEvent):
    """Des produits ont été vendus par une machine."""

    type: ClassVar[str] = "sale"


@dataclass(frozen=True)
class Refill(_QuantityEvent):
    """Une machine a été réapprovisionnée."""

    type: ClassVar[str] = "refill"


@dataclass(frozen=True)
class LowStockWarning(Event):
    """Le stock d'une machine vient de passer sous le seuil."""

    type: ClassVar[str] = "low_stock_warning"


@dataclass(frozen=True)
class StockLevelOk(Event):
    """Le stock d'une machine est revenu au niveau du seuil ou au-dessus."""

    type: ClassVar[str] = "stock_level_ok"


AnyEvent = Union[Sale, Refill, LowStockWarning, StockLevelOk]

EVENT_TYPES: dict[str, type[Event]] = {
    cls.type: cls for cls in (Sale, Refill, LowStockWarning, StockLevelOk)
}
