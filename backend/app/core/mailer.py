# app/core/mailer.py
import logging
from dataclasses import dataclass, field
from email.message import EmailMessage
from email.utils import formataddr, formatdate, make_msgid
from typing import Any, Dict, Optional, Protocol, Tuple

import aiosmtplib

log = logging.getLogger("uvicorn.error")


class TransportError(Exception):
    """Raised when the mail provider refuses or fails to take a message."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "code": self.code, "OK": False}


@dataclass(frozen=True)
class MailConfig:
    host: str
    port: int
    username: Optional[str] = None
    password: Optional[str] = None
    sender_address: Optional[str] = None
    recipients: Tuple[str, ...] = field(default_factory=tuple)
    timeout: float = 60.0

    @classmethod
    def from_settings(cls, settings) -> "MailConfig":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.user_email,
            password=settings.user_password,
            sender_address=settings.from_email or settings.user_email,
            recipients=tuple(settings.recipients),
            timeout=settings.smtp_timeout,
        )


@dataclass(frozen=True)
class OutboundMessage:
    sender_name: str
    sender_address: str
    recipients: Tuple[str, ...]
    subject: str
    body: str


@dataclass(frozen=True)
class DeliveryReceipt:
    message_id: str
    response: str


class MailTransport(Protocol):
    async def send(self, email: EmailMessage) -> DeliveryReceipt: ...


def _header_value(value: str) -> str:
    # header values cannot span lines
    return " ".join(value.splitlines())


class SmtpTransport:
    """Delivers messages over SMTP without blocking the event loop.

    Port 465 uses implicit TLS and port 587 upgrades with STARTTLS, the same
    way the Gmail account this service was written for expects.
    """

    def __init__(self, config: MailConfig):
        self._config = config

    async def send(self, email: EmailMessage) -> DeliveryReceipt:
        cfg = self._config
        credentials = {}
        if cfg.username and cfg.password:
            credentials = {"username": cfg.username, "password": cfg.password}
        try:
            _, response = await aiosmtplib.send(
                email,
                hostname=cfg.host,
                port=cfg.port,
                use_tls=cfg.port == 465,
                start_tls=True if cfg.port == 587 else None,
                timeout=cfg.timeout,
                **credentials,
            )
        except aiosmtplib.SMTPResponseException as exc:
            raise TransportError(exc.message, code=exc.code) from exc
        except (aiosmtplib.SMTPException, OSError) as exc:
            raise TransportError(str(exc)) from exc
        return DeliveryReceipt(message_id=email["Message-ID"], response=response)


class MailDispatcher:
    def __init__(self, config: MailConfig, transport: Optional[MailTransport] = None):
        self.config = config
        self.transport = transport if transport is not None else SmtpTransport(config)

    def render(self, message: OutboundMessage) -> EmailMessage:
        email = EmailMessage()
        email["From"] = formataddr((_header_value(message.sender_name), message.sender_address))
        email["To"] = ", ".join(message.recipients)
        email["Subject"] = _header_value(message.subject)
        email["Date"] = formatdate(localtime=True)
        domain = message.sender_address.rpartition("@")[2] or None
        email["Message-ID"] = make_msgid(domain=domain)
        email.set_content(message.body)
        return email

    async def send(self, message: OutboundMessage) -> DeliveryReceipt:
        """Hand one message to the transport.

        Failures are logged and re-raised as-is; nothing is retried.
        """
        if not message.sender_address or not message.recipients:
            log.error("[mailer] send failed: sender or recipients not configured")
            raise TransportError("mail transport is not configured (sender or recipients missing)")
        try:
            return await self.transport.send(self.render(message))
        except TransportError as exc:
            log.error(f"[mailer] send failed: {exc.message} (code={exc.code})")
            raise
