"""
Adapter pour les notifications.

Ce module fournit une abstraction sur l'envoi des alertes de stock
(logs, emails...), ce qui découple le ThresholdNotifier du mécanisme
de notification concret.
"""

from __future__ import annotations

import abc
import logging
import smtplib

from vending import config

logger = logging.getLogger(__name__)


class AbstractNotifications(abc.ABC):
    """Interface abstraite pour les notifications."""

    @abc.abstractmethod
    def send(self, destination: str, message: str) -> None:
        raise NotImplementedError


class LoggingNotifications(AbstractNotifications):
    """Écrit les alertes dans les logs. Implémentation par défaut."""

    def send(self, destination: str, message: str) -> None:
        logger.warning("[%s] %s", destination, message)


class EmailNotifications(AbstractNotifications):
    """Implémentation concrète envoyant des emails via SMTP."""

    def __init__(self, smtp_host: str | None = None, smtp_port: int | None = None):
        self.smtp_host = smtp_host or config.get_smtp_host()
        self.smtp_port = smtp_port or config.get_smtp_port()

    def send(self, destination: str, message: str) -> None:
        msg = f"Subject: Alerte de stock distributeur\n\n{message}"
        with smtplib.SMTP(self.smtp_host, self.smtp_port) as smtp:
            smtp.sendmail(
                from_addr="distributeurs@example.com",
                to_addrs=[destination],
                msg=msg,
            )


def from_config() -> AbstractNotifications:
    """Construit l'adapter choisi par VENDING_NOTIFICATIONS."""
    backend = config.get_notifications_backend()
    if backend == "email":
        return EmailNotifications()
    if backend == "log":
        return LoggingNotifications()
    raise ValueError(f"Backend de notifications inconnu : {backend!r}")
