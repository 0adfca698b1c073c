"""
Bootstrap : assemblage de l'application (Composition Root).

Ce module construit le store, l'event bus et inscrit les handlers.
C'est le seul endroit qui connaît les implémentations concrètes ;
les tests y injectent leurs fakes via les paramètres.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vending import config
from vending.adapters import notifications
from vending.adapters.store import AbstractMachineStore, InMemoryMachineStore
from vending.domain import events, model
from vending.service_layer import eventbus, handlers


@dataclass
class VendingSystem:
    """Le bus, le store et les inscriptions faites au démarrage."""

    bus: eventbus.EventBus
    store: AbstractMachineStore
    subscriptions: list[eventbus.Subscription] = field(default_factory=list)


def bootstrap(
    machine_store: AbstractMachineStore | None = None,
    notifications_adapter: notifications.AbstractNotifications | None = None,
    machine_ids: list[str] | None = None,
    initial_stock: int | None = None,
) -> VendingSystem:
    """
    Construit et retourne un VendingSystem configuré.

    Si aucun store n'est fourni, un store en mémoire est créé et rempli
    avec `machine_ids` (par défaut ceux de la configuration), chacune
    au niveau `initial_stock`.
    """
    if machine_store is None:
        if machine_ids is None:
            machine_ids = config.get_machine_ids()
        if initial_stock is None:
            initial_stock = config.get_initial_stock()
        machine_store = InMemoryMachineStore(
            [model.MachineRecord(machine_id, initial_stock) for machine_id in machine_ids]
        )

    if notifications_adapter is None:
        notifications_adapter = notifications.from_config()

    bus = eventbus.EventBus()
    notifier = handlers.ThresholdNotifier(notifications_adapter, config.get_alert_destination())
    routes: list[tuple[type[events.Event], eventbus.AbstractHandler]] = [
        (events.Sale, handlers.SaleHandler(machine_store, bus)),
        (events.Refill, handlers.RefillHandler(machine_store, bus)),
        (events.LowStockWarning, notifier),
        (events.StockLevelOk, notifier),
    ]
    subscriptions = [bus.subscribe(event_type, handler) for event_type, handler in routes]

    return VendingSystem(bus=bus, store=machine_store, subscriptions=subscriptions)
