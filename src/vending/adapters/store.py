"""
Pattern Repository appliqué aux distributeurs.

Le store est l'unique propriétaire des MachineRecord. Il expose une
interface de type collection (add, find) ; les handlers ne gardent
jamais de copie d'un record, ils passent toujours par `find` puis
modifient le record en place.

Le pattern Template Method est le même que pour un repository classique :
les méthodes publiques gèrent le contrat (erreur si absent), les
sous-classes implémentent les méthodes préfixées _.
"""

from __future__ import annotations

import abc
from typing import Iterator

from vending.domain import model


class MachineNotFound(LookupError):
    """Levée quand aucune machine ne correspond à l'identifiant demandé."""

    def __init__(self, machine_id: str):
        super().__init__(f"Machine inconnue : {machine_id}")
        self.machine_id = machine_id


class AbstractMachineStore(abc.ABC):
    """Interface abstraite du store de machines."""

    def add(self, record: model.MachineRecord) -> None:
        """Ajoute une machine. Un id déjà présent remplace l'ancien record."""
        self._add(record)

    def find(self, machine_id: str) -> model.MachineRecord:
        """
        Retourne le record vivant (partagé, mutable) de la machine.

        Lève MachineNotFound si l'id est inconnu.
        """
        record = self._get(machine_id)
        if record is None:
            raise MachineNotFound(machine_id)
        return record

    def list(self) -> list[model.MachineRecord]:
        """Toutes les machines, dans l'ordre d'ajout."""
        return list(self._iter())

    def __contains__(self, machine_id: object) -> bool:
        return isinstance(machine_id, str) and self._get(machine_id) is not None

    @abc.abstractmethod
    def _add(self, record: model.MachineRecord) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def _get(self, machine_id: str) -> model.MachineRecord | None:
        raise NotImplementedError

    @abc.abstractmethod
    def _iter(self) -> Iterator[model.MachineRecord]:
        raise NotImplementedError


class InMemoryMachineStore(AbstractMachineStore):
    """Store en mémoire, adossé à un dict (qui conserve l'ordre d'insertion)."""

    def __init__(self, records: list[model.MachineRecord] | None = None):
        self._records: dict[str, model.MachineRecord] = {}
        for record in records or []:
            self.add(record)

    def _add(self, record: model.MachineRecord) -> None:
        self._records[record.id] = record

    def _get(self, machine_id: str) -> model.MachineRecord | None:
        return self._records.get(machine_id)

    def _iter(self) -> Iterator[model.MachineRecord]:
        return iter(self._records.values())
