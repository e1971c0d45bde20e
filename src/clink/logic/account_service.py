"""
Stripe connected account onboarding and verification for parties.
"""

from aws_lambda_powertools.metrics import MetricUnit

from clink.dal import USERS, DocumentStore, parse_document
from clink.handlers.utils.errors import ResourceNotFoundError, ValidationError
from clink.handlers.utils.observability import logger, metrics, tracer
from clink.integrations import PaymentGateway
from clink.models.domain import Party

DEFAULT_REFRESH_URL = 'https://clinkapp.org/stripe-refresh'
DEFAULT_RETURN_URL = 'https://clinkapp.org/stripe-return'


class AccountService:
    """Manages a party's connected account."""

    def __init__(
        self,
        store: DocumentStore,
        payments: PaymentGateway,
        refresh_url: str = DEFAULT_REFRESH_URL,
        return_url: str = DEFAULT_RETURN_URL,
    ):
        self.store = store
        self.payments = payments
        self.refresh_url = refresh_url
        self.return_url = return_url

    def _get_party(self, uid: str) -> Party:
        data = self.store.get_document(USERS, uid)
        if data is None:
            raise ResourceNotFoundError(resource_type='User', resource_id=uid)
        return parse_document(Party, USERS, uid, data)

    @tracer.capture_method
    def create_onboarding_link(self, uid: str) -> str:
        """
        Return an onboarding link, creating the connected account on first use.

        Args:
            uid: Caller's party id

        Returns:
            Time-boxed onboarding URL
        """
        party = self._get_party(uid)
        account_id = party.stripe_account_id

        if not account_id:
            account_id = self.payments.create_express_account(email=party.email)
            self.store.update_document(USERS, uid, {'stripeAccountId': account_id})
            metrics.add_metric(name='ConnectedAccountCreated', unit=MetricUnit.Count, value=1)
            logger.info('Connected account created', extra={'uid': uid, 'stripe_account_id': account_id})

        url = self.payments.create_onboarding_link(
            account_id=account_id,
            refresh_url=self.refresh_url,
            return_url=self.return_url,
        )
        logger.info('Onboarding link created', extra={'uid': uid, 'stripe_account_id': account_id})
        return url

    @tracer.capture_method
    def verify_account(self, uid: str) -> bool:
        """
        Refresh and persist whether the caller's connected account can take charges.

        The account counts as verified only when details are submitted and charges
        are enabled.
        """
        party = self._get_party(uid)
        if not party.stripe_account_id:
            raise ValidationError(message='No Stripe account found')

        account = self.payments.retrieve_account(party.stripe_account_id)
        verified = bool(account['details_submitted']) and bool(account['charges_enabled'])

        self.store.update_document(USERS, uid, {'stripeVerified': verified})
        logger.info('Connected account verification refreshed', extra={
            'uid': uid,
            'stripe_account_id': party.stripe_account_id,
            'stripe_verified': verified,
        })
        return verified
