"""
Payment intents with a platform fee routed to the creator's connected account.
"""

from decimal import ROUND_HALF_UP, Decimal

from aws_lambda_powertools.metrics import MetricUnit

from clink.handlers.utils.errors import ValidationError
from clink.handlers.utils.observability import logger, metrics, tracer
from clink.integrations import PaymentGateway

PLATFORM_FEE_RATE = Decimal('0.07')
DEFAULT_CURRENCY = 'usd'


def compute_platform_fee(amount: int) -> int:
    """
    Platform fee in minor units: 7% of the amount, rounded half up (10000 -> 700).

    Gives the same result as rounding the float product for positive integer amounts.
    """
    return int((Decimal(amount) * PLATFORM_FEE_RATE).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


class PaymentService:
    """Creates fee-split payment intents."""

    def __init__(self, payments: PaymentGateway):
        self.payments = payments

    @tracer.capture_method
    def create_payment_intent(
        self,
        amount: int,
        destination_account_id: str,
        currency: str = DEFAULT_CURRENCY,
    ) -> str:
        """
        Create a payment intent and return its client secret.

        Args:
            amount: Amount to charge, in minor units
            destination_account_id: Connected account receiving the transfer
            currency: ISO currency code

        Returns:
            The payment intent client secret
        """
        if not amount or amount <= 0 or not destination_account_id:
            raise ValidationError(message='Missing parameters')

        fee = compute_platform_fee(amount)
        intent = self.payments.create_payment_intent(
            amount=amount,
            currency=currency,
            application_fee_amount=fee,
            destination_account_id=destination_account_id,
        )

        metrics.add_metric(name='PaymentIntentCreated', unit=MetricUnit.Count, value=1)
        logger.info('Payment intent created', extra={
            'payment_intent_id': intent.get('id'),
            'amount': amount,
            'currency': currency,
            'application_fee_amount': fee,
            'destination_account_id': destination_account_id,
        })
        return intent['client_secret']
