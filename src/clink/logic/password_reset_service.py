"""
Password reset emails.
"""

from aws_lambda_powertools.metrics import MetricUnit

from clink.handlers.utils.errors import ValidationError
from clink.handlers.utils.observability import logger, metrics, tracer
from clink.integrations import AuthProvider, Mailer

RESET_SENDER_NAME = 'Clink Support'
RESET_SUBJECT = 'Reset Your Clink Password'

RESET_EMAIL_TEMPLATE = """
<div style="font-family: 'Segoe UI', sans-serif;">
  <h1 style="color: #1E90FF;">Reset Your Clink Password</h1>
  <p>Click the button below to reset your password:</p>
  <a href="{reset_link}" style="background:#1E90FF;color:white;padding:10px 20px;text-decoration:none;border-radius:5px;">Reset Password</a>
  <p>If you didn&rsquo;t request this, you can ignore this email.</p>
</div>
"""


class PasswordResetService:
    def __init__(self, auth: AuthProvider, mailer: Mailer):
        self.auth = auth
        self.mailer = mailer

    @tracer.capture_method
    def send_reset_email(self, email: str) -> None:
        if not email:
            raise ValidationError(message='Email is required.')

        reset_link = self.auth.generate_password_reset_link(email)
        self.mailer.send(
            sender_name=RESET_SENDER_NAME,
            to=email,
            subject=RESET_SUBJECT,
            html=RESET_EMAIL_TEMPLATE.format(reset_link=reset_link),
        )

        metrics.add_metric(name='PasswordResetEmailSent', unit=MetricUnit.Count, value=1)
        logger.info('Password reset email sent')
