"""Outbound email over SMTP."""

import asyncio
import smtplib
from email.message import EmailMessage
from typing import Protocol

from stayhub.config import Settings, settings
from stayhub.exceptions import EmailDeliveryFailedError
from stayhub.logging import get_logger

logger = get_logger(__name__)


class Mailer(Protocol):
    async def send(self, *, to: str, subject: str, text: str, html: str | None = None) -> None: ...


class SMTPMailer:
    """Sends mail with smtplib in a worker thread so the event loop never blocks."""

    def __init__(self, config: Settings) -> None:
        self._config = config

    def _build(self, to: str, subject: str, text: str, html: str | None) -> EmailMessage:
        message = EmailMessage()
        message["From"] = f"{self._config.from_name} <{self._config.from_email}>"
        message["To"] = to
        message["Subject"] = subject
        message.set_content(text)
        if html:
            message.add_alternative(html, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        config = self._config
        with smtplib.SMTP(config.smtp_host, config.smtp_port, timeout=config.mail_timeout) as smtp:
            if config.smtp_starttls:
                smtp.starttls()
            if config.smtp_user:
                smtp.login(config.smtp_user, config.smtp_password)
            smtp.send_message(message)

    async def send(self, *, to: str, subject: str, text: str, html: str | None = None) -> None:
        message = self._build(to, subject, text, html)
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._deliver, message), self._config.mail_timeout
            )
        except (smtplib.SMTPException, OSError, TimeoutError) as exc:
            logger.error("email_send_failed", to=to, subject=subject, error=str(exc))
            raise EmailDeliveryFailedError() from exc
        logger.info("email_sent", to=to, subject=subject)


# Singleton
mailer = SMTPMailer(settings)
