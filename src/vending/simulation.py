"""
Simulation : génération aléatoire d'events et exécution d'une démo.

Une vente retire 1 ou 2 produits, un réapprovisionnement en ajoute 3
ou 5 ; chaque event vise une machine tirée uniformément.
"""

from __future__ import annotations

import logging
import random

from vending.domain import events
from vending.service_layer.bootstrap import VendingSystem, bootstrap

logger = logging.getLogger(__name__)

SALE_QUANTITIES = (1, 2)
REFILL_QUANTITIES = (3, 5)


def random_machine(rng: random.Random, machine_ids: list[str]) -> str:
    return rng.choice(machine_ids)


def random_event(rng: random.Random, machine_ids: list[str]) -> events.Event:
    """Une vente ou un réapprovisionnement, avec une chance sur deux chacun."""
    if rng.random() < 0.5:
        return events.Sale(
            machine_id=random_machine(rng, machine_ids),
            quantity=rng.choice(SALE_QUANTITIES),
        )
    return events.Refill(
        machine_id=random_machine(rng, machine_ids),
        quantity=rng.choice(REFILL_QUANTITIES),
    )


def generate_events(count: int, rng: random.Random, machine_ids: list[str]) -> list[events.Event]:
    return [random_event(rng, machine_ids) for _ in range(count)]


def run(system: VendingSystem, count: int = 5, seed: int | None = None) -> list[events.Event]:
    """
    Publie `count` events aléatoires sur les machines du store, puis
    logge l'état de chaque machine. Retourne les events publiés.
    """
    rng = random.Random(seed)
    machine_ids = [machine.id for machine in system.store.list()]
    generated = generate_events(count, rng, machine_ids)
    for event in generated:
        logger.info("Publication de %s", event)
        system.bus.publish(event)
    for machine in system.store.list():
        logger.info("%s", machine.describe())
    return generated


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    run(bootstrap())


if __name__ == "__main__":
    main()
