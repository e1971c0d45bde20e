"""
Accounts Handler - connected account onboarding and verification.
"""

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.event_handler.api_gateway import Router

from clink.dependencies import get_collaborators
from clink.handlers.utils.identity import require_caller_uid
from clink.handlers.utils.observability import logger, tracer
from clink.handlers.utils.rest_api_resolver import ACCOUNT_LINK_PATH, VERIFY_ACCOUNT_PATH, json_response
from clink.logic.account_service import AccountService
from clink.models.output import AccountLinkOutput, VerifyAccountOutput

router = Router()


def get_account_service() -> AccountService:
    collaborators = get_collaborators()
    return AccountService(
        store=collaborators.store,
        payments=collaborators.payments,
        refresh_url=collaborators.env.STRIPE_REFRESH_URL,
        return_url=collaborators.env.STRIPE_RETURN_URL,
    )


@router.post(ACCOUNT_LINK_PATH)
@tracer.capture_method
def create_account_link() -> Response:
    uid = require_caller_uid(router.current_event)
    logger.info('Account link request received', extra={'uid': uid})

    url = get_account_service().create_onboarding_link(uid)

    return json_response(200, AccountLinkOutput(url=url).to_json())


@router.post(VERIFY_ACCOUNT_PATH)
@tracer.capture_method
def verify_account() -> Response:
    uid = require_caller_uid(router.current_event)
    logger.info('Verify account request received', extra={'uid': uid})

    verified = get_account_service().verify_account(uid)

    return json_response(200, VerifyAccountOutput(stripe_verified=verified).to_json())
