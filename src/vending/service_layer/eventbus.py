"""
Event Bus.

L'event bus est le point central de dispatch des events vers les
handlers abonnés à leur type.

Fonctionnement :
1. publish() ajoute l'event en queue de file
2. Si aucun drain n'est en cours, publish() draine la file : il retire
   l'event de tête, lit la liste des abonnés à ce moment-là, et appelle
   chacun d'eux dans l'ordre d'abonnement
3. Un handler qui publie pendant le drain ne fait qu'ajouter en fin de
   file ; la boucle de drain englobante le traitera après tous les
   events déjà en attente

Il n'y a donc jamais de dispatch récursif : un event dérivé est toujours
traité après ses aînés. Quand l'appel publish() initial retourne, tous
les events qu'il a engendrés ont été traités.

En cas d'échec d'un handler, l'erreur est loggée, le drain continue
jusqu'à vider la file, puis la première erreur remonte à l'appelant
du publish() initial.
"""

from __future__ import annotations

import abc
import itertools
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Union

from vending.domain import events

logger = logging.getLogger(__name__)


class AbstractHandler(abc.ABC):
    """Un abonné : reçoit les events des types pour lesquels il est inscrit."""

    @abc.abstractmethod
    def handle(self, event: events.Event) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class Subscription:
    """
    Handle opaque retourné par subscribe().

    Il désigne une inscription précise (un handler sous un type), pas
    un handler ni un type : unsubscribe() ne retire que celle-là.
    """

    id: int
    event_type: str
    handler: AbstractHandler = field(compare=False, repr=False)


EventType = Union[str, type[events.Event]]


def _tag(event_type: EventType) -> str:
    if isinstance(event_type, type) and issubclass(event_type, events.Event):
        return event_type.type
    return event_type


class EventBus:
    """Bus synchrone avec une file FIFO et un seul drain actif à la fois."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[Subscription]] = {}
        self._queue: deque[events.Event] = deque()
        self._ids = itertools.count(1)
        self._draining = False

    @property
    def is_draining(self) -> bool:
        return self._draining

    def subscribe(self, event_type: EventType, handler: AbstractHandler) -> Subscription:
        """
        Inscrit `handler` pour `event_type` (étiquette ou classe d'event).

        Peut être appelé pendant un drain : le nouvel abonné recevra les
        events pas encore dispatchés, jamais celui en cours.
        """
        subscription = Subscription(next(self._ids), _tag(event_type), handler)
        self._subscriptions.setdefault(subscription.event_type, []).append(subscription)
        logger.debug("Abonnement de %r à %s", handler, subscription.event_type)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Retire cette inscription et elle seule. Sans effet si déjà retirée."""
        subscriptions = self._subscriptions.get(subscription.event_type, [])
        for index, candidate in enumerate(subscriptions):
            if candidate is subscription:
                del subscriptions[index]
                logger.debug(
                    "Désabonnement de %r de %s", subscription.handler, subscription.event_type
                )
                return

    def subscribers(self, event_type: EventType) -> list[AbstractHandler]:
        """Copie de la liste des handlers actuellement inscrits pour ce type."""
        return [s.handler for s in self._subscriptions.get(_tag(event_type), [])]

    def publish(self, event: events.Event) -> None:
        """
        Point d'entrée principal : met l'event en file et, si aucun
        drain n'est en cours, traite la file jusqu'à la vider.
        """
        self._queue.append(event)
        if self._draining:
            logger.debug("Event %s mis en file pendant un drain", event)
            return
        self._drain()

    def publish_all(self, batch: Iterable[events.Event]) -> None:
        """
        Met tous les events en file avant de drainer : les events dérivés
        de l'un d'eux passent après le reste du lot.
        """
        self._queue.extend(batch)
        if not self._draining:
            self._drain()

    def _drain(self) -> None:
        failures: list[Exception] = []
        self._draining = True
        try:
            while self._queue:
                event = self._queue.popleft()
                failures.extend(self._dispatch(event))
        finally:
            self._draining = False
            if self._queue:
                # drain interrompu (KeyboardInterrupt...) : le reste est abandonné
                logger.warning("Drain interrompu, %d event(s) abandonné(s)", len(self._queue))
                self._queue.clear()
        if failures:
            raise failures[0]

    def _dispatch(self, event: events.Event) -> list[Exception]:
        """
        Dispatch un event vers tous ses abonnés.

        La liste des abonnés est figée au moment du dispatch. Si un
        handler échoue, l'erreur est loggée et les suivants sont
        quand même appelés.
        """
        failures: list[Exception] = []
        for subscription in list(self._subscriptions.get(event.type, [])):
            try:
                logger.debug("Traitement de l'event %s avec %r", event, subscription.handler)
                subscription.handler.handle(event)
            except Exception as exc:
                logger.exception(
                    "Erreur lors du traitement de l'event %s pour la machine %s",
                    event.type, event.machine_id,
                )
                exc.add_note(f"event {event.type!r}, machine {event.machine_id!r}")
                failures.append(exc)
        return failures
