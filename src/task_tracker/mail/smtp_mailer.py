# src/task_tracker/mail/smtp_mailer.py

from __future__ import annotations

import logging
import smtplib
from email.mime.text import MIMEText

from ..core.ports import DeliveryResult, EmailMessage

logger = logging.getLogger(__name__)


class SmtpMailer:
    """
    EmailDispatcher over plain SMTP (+ optional STARTTLS and login).

    One connection per message: reminders are rare (a handful per minute at
    most) and a fresh connection avoids stale-socket handling.
    """

    def __init__(
        self,
        *,
        host: str,
        port: int = 587,
        user: str | None = None,
        password: str | None = None,
        starttls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        if not host:
            raise ValueError("SMTP host is required")
        self.host = host
        self.port = int(port)
        self.user = user
        self.password = password
        self.starttls = starttls
        self.timeout = float(timeout)

    @classmethod
    def from_settings(cls, settings) -> SmtpMailer:
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.smtp_user,
            password=settings.smtp_password,
            starttls=settings.smtp_starttls,
            timeout=settings.smtp_timeout_seconds,
        )

    def _connect(self) -> smtplib.SMTP:
        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        try:
            if self.starttls:
                server.starttls()
            if self.user and self.password:
                server.login(self.user, self.password)
        except Exception:
            server.close()
            raise
        return server

    def verify(self) -> bool:
        """Connect + NOOP. Logs and returns False instead of raising."""
        try:
            with self._connect() as server:
                code, _ = server.noop()
        except (smtplib.SMTPException, OSError):
            logger.exception("SMTP connection error host=%s port=%s", self.host, self.port)
            return False
        ok = code == 250
        if ok:
            logger.info("SMTP connection successful host=%s port=%s", self.host, self.port)
        else:
            logger.error("SMTP NOOP returned %s host=%s", code, self.host)
        return ok

    def send(self, message: EmailMessage) -> DeliveryResult:
        mime = MIMEText(message.body, "plain", "utf-8")
        mime["Subject"] = message.subject
        mime["From"] = message.from_addr
        mime["To"] = message.to_addr

        try:
            with self._connect() as server:
                refused = server.sendmail(message.from_addr, [message.to_addr], mime.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            return DeliveryResult.failure(f"{type(exc).__name__}: {exc}")

        if refused:
            return DeliveryResult.failure(f"recipient refused: {refused}")
        return DeliveryResult.success()
