"""
Modèle de domaine pour le suivi de stock des distributeurs.

Une MachineRecord est une entité : elle a une identité stable (son id)
et un état mutable (niveau de stock, drapeau d'alerte). Le seuil
d'alerte est fixe et partagé par toutes les machines.
"""

from __future__ import annotations

LOW_STOCK_THRESHOLD = 3
DEFAULT_STOCK_LEVEL = 10


def is_below_threshold(stock_level: int) -> bool:
    """Vrai si le niveau de stock est strictement sous le seuil d'alerte."""
    return stock_level < LOW_STOCK_THRESHOLD


class MachineRecord:
    """
    Entité représentant un distributeur.

    Le niveau de stock peut devenir négatif (survente) : rien dans le
    domaine ne l'interdit, les appelants ne doivent pas supposer
    `stock_level >= 0`.

    `low_stock_warned` vaut True si et seulement si un LowStockWarning
    a été émis pour cette machine sans StockLevelOk depuis. C'est ce
    drapeau qui empêche les alertes en double.

    L'égalité et le hash sont basés sur l'id (identité), comme pour
    toute entité.
    """

    def __init__(self, id: str, stock_level: int = DEFAULT_STOCK_LEVEL):
        self._id = id
        self.stock_level = stock_level
        self.low_stock_warned = False

    @property
    def id(self) -> str:
        return self._id

    def __repr__(self) -> str:
        return f"<MachineRecord {self._id} stock={self.stock_level}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MachineRecord):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def describe(self) -> str:
        return f"ID: {self._id}, StockLevel: {self.stock_level}"
