"""
Envoi des notifications aux managers et aux employés.

Les event handlers ne connaissent que AbstractNotifications ;
l'envoi réel passe par SMTP.
"""

from __future__ import annotations

import abc
import smtplib
from email.message import EmailMessage

from timeoff import config


class AbstractNotifications(abc.ABC):
    @abc.abstractmethod
    def send(self, destination: str, message: str) -> None:
        raise NotImplementedError


class EmailNotifications(AbstractNotifications):
    """Un email par notification, via le serveur SMTP configuré."""

    def __init__(self, smtp_host: str | None = None, smtp_port: int | None = None):
        server = config.get_email_host_and_port()
        self.smtp_host = smtp_host or server["host"]
        self.smtp_port = smtp_port or server["port"]

    def send(self, destination: str, message: str) -> None:
        email = EmailMessage()
        email["Subject"] = "Demande de congé"
        email["From"] = config.get_sender_email()
        email["To"] = destination
        email.set_content(message)
        with smtplib.SMTP(self.smtp_host, self.smtp_port) as smtp:
            smtp.send_message(email)
