"""
Configuration de l'application.

Toutes les valeurs viennent de variables d'environnement,
avec des valeurs par défaut adaptées au développement local.
"""

from __future__ import annotations

import os


def get_db_uri() -> str:
    return os.environ.get("TIMEOFF_DB_URI", "sqlite:///timeoff.db")


def get_email_host_and_port() -> dict:
    host = os.environ.get("EMAIL_HOST", "localhost")
    port = int(os.environ.get("EMAIL_PORT", 587))
    return dict(host=host, port=port)


def get_sender_email() -> str:
    return os.environ.get("SENDER_EMAIL", "conges@example.com")


def get_manager_email() -> str:
    return os.environ.get("MANAGER_EMAIL", "manager@example.com")


def get_employee_email(user_id: int) -> str:
    """L'adresse d'un employé est dérivée de son identifiant."""
    template = os.environ.get("EMPLOYEE_EMAIL_TEMPLATE", "employee-{user_id}@example.com")
    return template.format(user_id=user_id)


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()
