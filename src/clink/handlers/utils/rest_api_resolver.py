"""
REST API resolver utility for the Clink Lambda function.

Provides the configured API Gateway REST resolver, the exception handlers that
turn service errors into JSON error responses, and request/response helpers
shared by the routers.
"""

import json
from typing import Any, Dict, Type, TypeVar

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig, Response, content_types
from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from clink.handlers.utils.errors import (
    BaseServiceError,
    ValidationError,
    format_error_response,
    get_http_status_code,
    log_error_metrics,
)
from clink.handlers.utils.observability import logger

# API path constants
PASSWORD_RESET_PATH = '/password-reset'
PAYMENT_INTENTS_PATH = '/payment-intents'
RECEIPTS_PATH = '/receipts'
ACCOUNT_LINK_PATH = '/stripe/account-link'
VERIFY_ACCOUNT_PATH = '/stripe/verify'

M = TypeVar('M', bound=BaseModel)

cors_config = CORSConfig(
    allow_origin='*',
    max_age=600,
    allow_headers=['content-type', 'authorization'],
)

app = APIGatewayRestResolver(cors=cors_config)


def json_response(status_code: int, body: str) -> Response:
    """Create a JSON API Gateway response."""
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=body,
    )


def parse_body(event: APIGatewayProxyEvent, model: Type[M]) -> M:
    """
    Parse and validate a JSON request body.

    Raises:
        ValidationError: If the body is not a JSON object
        pydantic.ValidationError: If the payload does not match the model
    """
    try:
        payload: Any = json.loads(event.decoded_body or '{}')
    except json.JSONDecodeError as e:
        raise ValidationError(message='Invalid JSON in request body') from e

    if not isinstance(payload, dict):
        raise ValidationError(message='Request body must be a JSON object')
    return model.model_validate(payload)


@app.exception_handler(BaseServiceError)
def handle_service_error(error: BaseServiceError) -> Response:
    log_error_metrics(error)
    return json_response(get_http_status_code(error), json.dumps(format_error_response(error)))


@app.exception_handler(PydanticValidationError)
def handle_request_validation_error(error: PydanticValidationError) -> Response:
    field_errors = [
        {'field': '.'.join(str(part) for part in e['loc']) or 'body', 'message': e['msg']}
        for e in error.errors()
    ]
    logger.info('Request validation failed', extra={'field_errors': field_errors})

    validation_error = ValidationError(message='Request validation failed', field_errors=field_errors)
    log_error_metrics(validation_error)
    body: Dict[str, Any] = format_error_response(validation_error)
    return json_response(400, json.dumps(body))
