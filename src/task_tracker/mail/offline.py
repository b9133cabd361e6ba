# src/task_tracker/mail/offline.py

from __future__ import annotations

import logging

from ..core.ports import DeliveryResult, EmailMessage

logger = logging.getLogger(__name__)


class LogOnlyMailer:
    """
    Mailer used for demos / local runs when no SMTP host is configured.

    Every message is written to the log and reported as delivered.
    """

    def verify(self) -> bool:
        logger.warning(
            "SMTP is not configured; reminders are only logged. "
            "Set TASK_TRACKER_SMTP_HOST to enable real delivery."
        )
        return True

    def send(self, message: EmailMessage) -> DeliveryResult:
        logger.info(
            "Offline mail to=%s subject=%r\n%s",
            message.to_addr,
            message.subject,
            message.body,
        )
        return DeliveryResult.success()
