"""
Configuration partagée pour les tests.

Fournit un recorder (abonné qui mémorise ce qu'il reçoit) et un
store de trois machines au stock de départ 5.
"""

from __future__ import annotations

import pytest

from vending.adapters.store import InMemoryMachineStore
from vending.domain import events
from vending.domain.model import MachineRecord
from vending.service_layer.eventbus import AbstractHandler


class Recorder(AbstractHandler):
    """Abonné qui enregistre les events reçus, dans l'ordre."""

    def __init__(self, journal: list | None = None, name: str = "recorder"):
        self.journal = journal if journal is not None else []
        self.name = name

    def handle(self, event: events.Event) -> None:
        self.journal.append((self.name, event))

    @property
    def received(self) -> list[events.Event]:
        return [event for name, event in self.journal if name == self.name]

    @property
    def types(self) -> list[str]:
        return [event.type for event in self.received]


@pytest.fixture
def store():
    return InMemoryMachineStore([MachineRecord(i, 5) for i in ("001", "002", "003")])


@pytest.fixture
def make_recorder():
    return Recorder
