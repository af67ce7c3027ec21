from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Protocol

from ..core.exceptions import NotificationFailure, WorkerNotFound
from ..workers.repository import WorkerRepository

logger = logging.getLogger("workers_management.notifications")


class Notifier(Protocol):
    def notify(self, worker_id: int, subject: str, body: str) -> None:
        """Deliver one message; raises NotificationFailure when it cannot."""
        raise NotImplementedError


@dataclass(frozen=True)
class SmtpConfig:
    host: str = ""
    port: int = 587
    user: str = ""
    password: str = ""
    sender: str = ""
    use_tls: bool = True
    timeout_seconds: float = 15.0

    @classmethod
    def from_dict(cls, smtp_config: dict) -> "SmtpConfig":
        return cls(
            host=str(smtp_config.get("host") or ""),
            port=int(smtp_config.get("port", 587)),
            user=str(smtp_config.get("user") or ""),
            password=str(smtp_config.get("password") or ""),
            sender=str(smtp_config.get("sender") or ""),
            use_tls=bool(smtp_config.get("use_tls", True)),
            timeout_seconds=float(smtp_config.get("timeout_seconds", 15.0)),
        )

    @property
    def configured(self) -> bool:
        return bool(self.host and self.sender)


class SmtpNotifier(Notifier):
    """E-mail notifications; without SMTP settings the message is only logged."""

    def __init__(self, workers: WorkerRepository, config: SmtpConfig):
        self._workers = workers
        self._config = config

    def notify(self, worker_id: int, subject: str, body: str) -> None:
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise WorkerNotFound(worker_id)
        if not worker.email:
            raise NotificationFailure(f"Worker {worker_id} has no e-mail address")

        if not self._config.configured:
            logger.info(
                "email_channel_placeholder_send",
                extra={"worker_id": worker_id, "subject": subject, "recipient": worker.email, "body": body},
            )
            return

        message = EmailMessage()
        message["From"] = self._config.sender
        message["To"] = formataddr((worker.full_name, worker.email))
        message["Subject"] = subject
        message.set_content(body)

        try:
            with smtplib.SMTP(self._config.host, self._config.port, timeout=self._config.timeout_seconds) as client:
                if self._config.use_tls:
                    client.starttls()
                if self._config.user:
                    client.login(self._config.user, self._config.password)
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationFailure(f"E-mail to worker {worker_id} failed: {exc}") from exc

        logger.info("email_sent", extra={"worker_id": worker_id, "subject": subject})
