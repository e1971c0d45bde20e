"""
Payments Handler - creates payment intents for authenticated callers.
"""

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.event_handler.api_gateway import Router

from clink.dependencies import get_collaborators
from clink.handlers.utils.identity import require_caller_uid
from clink.handlers.utils.observability import logger, tracer
from clink.handlers.utils.rest_api_resolver import PAYMENT_INTENTS_PATH, json_response, parse_body
from clink.logic.payment_service import PaymentService
from clink.models.input import CreatePaymentIntentRequest
from clink.models.output import PaymentIntentOutput

router = Router()


@router.post(PAYMENT_INTENTS_PATH)
@tracer.capture_method
def create_payment_intent() -> Response:
    """
    Create a payment intent whose platform fee is routed to the creator account.

    Returns:
        ``{"clientSecret": ...}``
    """
    uid = require_caller_uid(router.current_event, message='User must be authenticated')
    request = parse_body(router.current_event, CreatePaymentIntentRequest)
    logger.info('Create payment intent request received', extra={'uid': uid, 'amount': request.amount})

    client_secret = PaymentService(payments=get_collaborators().payments).create_payment_intent(
        amount=request.amount,
        destination_account_id=request.destination_account_id,
        currency=request.currency,
    )

    return json_response(200, PaymentIntentOutput(client_secret=client_secret).to_json())
