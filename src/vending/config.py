"""
Configuration lue depuis l'environnement.

Chaque valeur a un défaut raisonnable ; bootstrap() permet de les
surcharger explicitement (c'est ce que font les tests).
"""

from __future__ import annotations

import os


def get_machine_ids() -> list[str]:
    raw = os.environ.get("VENDING_MACHINE_IDS", "001,002,003")
    return [machine_id.strip() for machine_id in raw.split(",") if machine_id.strip()]


def get_initial_stock() -> int:
    return int(os.environ.get("VENDING_INITIAL_STOCK", "10"))


def get_smtp_host() -> str:
    return os.environ.get("VENDING_SMTP_HOST", "localhost")


def get_smtp_port() -> int:
    return int(os.environ.get("VENDING_SMTP_PORT", "587"))


def get_alert_destination() -> str:
    return os.environ.get("VENDING_ALERT_EMAIL", "stock@example.com")


def get_notifications_backend() -> str:
    """`log` (par défaut) ou `email`."""
    return os.environ.get("VENDING_NOTIFICATIONS", "log").strip().lower()
