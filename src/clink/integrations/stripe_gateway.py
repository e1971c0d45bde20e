"""
Stripe Connect integration: payment intents and Express connected accounts.
"""

from typing import Any, Dict, Mapping

import stripe

from clink.handlers.utils.errors import ExternalServiceError
from clink.handlers.utils.observability import logger, tracer

SERVICE_NAME = 'stripe'


class StripeGateway:
    """Payment gateway issuing every call with an explicit API key."""

    def __init__(self, api_key: str):
        self._api_key = api_key

    def _fail(self, operation: str, error: Exception) -> ExternalServiceError:
        logger.error('Stripe request failed', extra={
            'operation': operation,
            'error': str(error),
            'stripe_error_code': getattr(error, 'code', None),
        })
        return ExternalServiceError(message=f'Stripe {operation} failed: {error}', service_name=SERVICE_NAME)

    @tracer.capture_method
    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        application_fee_amount: int,
        destination_account_id: str,
    ) -> Dict[str, Any]:
        try:
            intent = stripe.PaymentIntent.create(
                api_key=self._api_key,
                amount=amount,
                currency=currency,
                payment_method_types=['card'],
                application_fee_amount=application_fee_amount,
                transfer_data={'destination': destination_account_id},
            )
        except stripe.StripeError as e:
            raise self._fail('payment_intent.create', e) from e

        return {'id': intent['id'], 'client_secret': intent['client_secret']}

    @tracer.capture_method
    def create_express_account(self, email: str) -> str:
        try:
            account = stripe.Account.create(
                api_key=self._api_key,
                type='express',
                email=email,
                capabilities={
                    'card_payments': {'requested': True},
                    'transfers': {'requested': True},
                },
            )
        except stripe.StripeError as e:
            raise self._fail('account.create', e) from e

        return account['id']

    @tracer.capture_method
    def create_onboarding_link(self, account_id: str, refresh_url: str, return_url: str) -> str:
        try:
            link = stripe.AccountLink.create(
                api_key=self._api_key,
                account=account_id,
                refresh_url=refresh_url,
                return_url=return_url,
                type='account_onboarding',
            )
        except stripe.StripeError as e:
            raise self._fail('account_link.create', e) from e

        return link['url']

    @tracer.capture_method
    def retrieve_account(self, account_id: str) -> Mapping[str, Any]:
        """Return the account status flags as a plain mapping; absent flags read as False."""
        try:
            account = stripe.Account.retrieve(account_id, api_key=self._api_key)
        except stripe.StripeError as e:
            raise self._fail('account.retrieve', e) from e

        # StripeObject exposes fields as attributes, not dict methods
        return {
            'id': account.id,
            'details_submitted': bool(getattr(account, 'details_submitted', False)),
            'charges_enabled': bool(getattr(account, 'charges_enabled', False)),
        }
