"""
SMTP mail relay integration (implicit TLS, authenticated).
"""

import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional, Sequence

from clink.handlers.utils.errors import ExternalServiceError
from clink.handlers.utils.observability import logger, tracer

DEFAULT_TIMEOUT_SECONDS = 15


class SmtpMailer:
    """Sends HTML email through an authenticated SMTP-over-TLS relay."""

    def __init__(self, host: str, port: int, user: str, password: str, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.host = host
        self.port = port
        self._user = user
        self._password = password
        self.timeout = timeout

    @property
    def sender_address(self) -> str:
        return self._user

    def build_message(
        self,
        sender_name: str,
        to: str,
        subject: str,
        html: str,
        cc: Optional[Sequence[str]] = None,
    ) -> EmailMessage:
        msg = EmailMessage()
        msg['From'] = formataddr((sender_name, self._user))
        msg['To'] = to
        if cc:
            msg['Cc'] = ', '.join(cc)
        msg['Subject'] = subject
        msg.set_content('This message requires an HTML capable mail client.')
        msg.add_alternative(html, subtype='html')
        return msg

    @tracer.capture_method
    def send(
        self,
        sender_name: str,
        to: str,
        subject: str,
        html: str,
        cc: Optional[Sequence[str]] = None,
    ) -> None:
        msg = self.build_message(sender_name=sender_name, to=to, subject=subject, html=html, cc=cc)
        try:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout,
                                  context=ssl.create_default_context()) as smtp:
                smtp.login(self._user, self._password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error('SMTP send failed', extra={'host': self.host, 'subject': subject, 'error': str(e)})
            raise ExternalServiceError(message=f'Email delivery failed: {e}', service_name='smtp') from e

        logger.info('Email sent', extra={'subject': subject, 'recipients': 1 + len(cc or [])})
