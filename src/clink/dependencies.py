"""
Collaborator wiring for the Clink handlers.

Clients are built lazily, once per execution environment, from environment
variables and Secrets Manager. Tests replace the whole container with
``set_collaborators``.
"""

from typing import Any, Dict, Optional

from aws_lambda_powertools.utilities import parameters

from clink.dal import HIRE_REQUESTS, RECEIPTS, USERS, DocumentStore, get_document_store
from clink.handlers.models.env_vars import ClinkEnvVars, get_handler_env_vars
from clink.handlers.utils.observability import logger
from clink.integrations import AuthProvider, Mailer, MediaHost, PaymentGateway


class Collaborators:
    """Holds one client per external collaborator."""

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        auth: Optional[AuthProvider] = None,
        payments: Optional[PaymentGateway] = None,
        media: Optional[MediaHost] = None,
        mailer: Optional[Mailer] = None,
        env: Optional[ClinkEnvVars] = None,
    ):
        self._store = store
        self._auth = auth
        self._payments = payments
        self._media = media
        self._mailer = mailer
        self._env = env

    @property
    def env(self) -> ClinkEnvVars:
        if self._env is None:
            self._env = get_handler_env_vars()
        return self._env

    def _secret(self, name: str) -> Dict[str, Any]:
        return parameters.get_secret(name, transform='json', max_age=self.env.SECRETS_MAX_AGE_SECONDS)

    @property
    def store(self) -> DocumentStore:
        if self._store is None:
            self._store = get_document_store(
                table_names={
                    USERS: self.env.USERS_TABLE_NAME,
                    HIRE_REQUESTS: self.env.HIRE_REQUESTS_TABLE_NAME,
                    RECEIPTS: self.env.RECEIPTS_TABLE_NAME,
                },
                endpoint_url=self.env.DYNAMODB_ENDPOINT,
            )
        return self._store

    @property
    def auth(self) -> AuthProvider:
        if self._auth is None:
            from clink.integrations.firebase_auth import FirebaseAuthProvider

            self._auth = FirebaseAuthProvider(service_account=self._secret(self.env.FIREBASE_SECRET_NAME))
        return self._auth

    @property
    def payments(self) -> PaymentGateway:
        if self._payments is None:
            from clink.integrations.stripe_gateway import StripeGateway

            secret = self._secret(self.env.STRIPE_SECRET_NAME)
            self._payments = StripeGateway(api_key=secret['secret_key'])
        return self._payments

    @property
    def media(self) -> MediaHost:
        if self._media is None:
            from clink.integrations.cloudinary_media import CloudinaryMediaHost

            secret = self._secret(self.env.CLOUDINARY_SECRET_NAME)
            self._media = CloudinaryMediaHost(
                cloud_name=secret['cloud_name'],
                api_key=secret['api_key'],
                api_secret=secret['api_secret'],
            )
        return self._media

    @property
    def mailer(self) -> Mailer:
        if self._mailer is None:
            from clink.integrations.smtp_mailer import SmtpMailer

            secret = self._secret(self.env.MAIL_SECRET_NAME)
            self._mailer = SmtpMailer(
                host=self.env.SMTP_HOST,
                port=self.env.SMTP_PORT,
                user=secret['user'],
                password=secret['password'],
            )
        return self._mailer


_collaborators: Optional[Collaborators] = None


def get_collaborators() -> Collaborators:
    """Get or create the collaborators for this execution environment."""
    global _collaborators

    if _collaborators is None:
        logger.debug('Creating collaborators container')
        _collaborators = Collaborators()
    return _collaborators


def set_collaborators(collaborators: Optional[Collaborators]) -> None:
    """Replace the collaborators container; ``None`` resets to lazy production wiring."""
    global _collaborators
    _collaborators = collaborators
