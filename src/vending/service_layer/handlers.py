"""
Handlers abonnés à l'EventBus.

- SaleHandler / RefillHandler : modifient le stock d'une machine et
  publient un event dérivé quand le seuil est franchi
- ThresholdNotifier : signale les franchissements de seuil, sans
  modifier aucun état

Les deux premiers forment ensemble une machine à deux états par
distributeur, {Normal, Warned} : Normal -> Warned quand une vente fait
passer le stock sous le seuil, Warned -> Normal quand un
réapprovisionnement le ramène au seuil ou au-dessus. Les transitions
sont déclenchées sur front : rester sous le seuil ne ré-émet rien.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vending.domain import events, model
from vending.service_layer.eventbus import AbstractHandler

if TYPE_CHECKING:
    from vending.adapters.notifications import AbstractNotifications
    from vending.adapters.store import AbstractMachineStore
    from vending.service_layer.eventbus import EventBus

logger = logging.getLogger(__name__)


class SaleHandler(AbstractHandler):
    """Décrémente le stock et émet LowStockWarning au passage sous le seuil."""

    def __init__(self, store: AbstractMachineStore, bus: EventBus):
        self.store = store
        self.bus = bus

    def handle(self, event: events.Event) -> None:
        if not isinstance(event, events.Sale):
            return
        machine = self.store.find(event.machine_id)
        stock_level = machine.stock_level - event.quantity
        crossed = model.is_below_threshold(stock_level) and not machine.low_stock_warned

        machine.stock_level = stock_level
        if crossed:
            machine.low_stock_warned = True
            self.bus.publish(events.LowStockWarning(machine_id=machine.id))
        logger.debug("Vente de %d sur %s, stock %d", event.quantity, machine.id, stock_level)


class RefillHandler(AbstractHandler):
    """Incrémente le stock et émet StockLevelOk au retour au-dessus du seuil."""

    def __init__(self, store: AbstractMachineStore, bus: EventBus):
        self.store = store
        self.bus = bus

    def handle(self, event: events.Event) -> None:
        if not isinstance(event, events.Refill):
            return
        machine = self.store.find(event.machine_id)
        stock_level = machine.stock_level + event.quantity
        crossed = not model.is_below_threshold(stock_level) and machine.low_stock_warned

        machine.stock_level = stock_level
        if crossed:
            machine.low_stock_warned = False
            self.bus.publish(events.StockLevelOk(machine_id=machine.id))
        logger.debug(
            "Réapprovisionnement de %d sur %s, stock %d", event.quantity, machine.id, stock_level
        )


class ThresholdNotifier(AbstractHandler):
    """Envoie une notification lisible à chaque franchissement de seuil."""

    def __init__(self, notifications: AbstractNotifications, destination: str):
        self.notifications = notifications
        self.destination = destination

    def handle(self, event: events.Event) -> None:
        if isinstance(event, events.LowStockWarning):
            message = f"Stock bas sur la machine {event.machine_id}"
        elif isinstance(event, events.StockLevelOk):
            message = f"Stock revenu à la normale sur la machine {event.machine_id}"
        else:
            return
        self.notifications.send(destination=self.destination, message=message)
