"""
Password Reset Handler - emails a password reset link.
"""

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.event_handler.api_gateway import Router

from clink.dependencies import get_collaborators
from clink.handlers.utils.observability import tracer
from clink.handlers.utils.rest_api_resolver import PASSWORD_RESET_PATH, json_response, parse_body
from clink.logic.password_reset_service import PasswordResetService
from clink.models.input import PasswordResetRequest
from clink.models.output import SuccessOutput

router = Router()


@router.post(PASSWORD_RESET_PATH)
@tracer.capture_method
def send_reset_email() -> Response:
    request = parse_body(router.current_event, PasswordResetRequest)

    collaborators = get_collaborators()
    PasswordResetService(auth=collaborators.auth, mailer=collaborators.mailer).send_reset_email(request.email)

    return json_response(200, SuccessOutput().to_json())
