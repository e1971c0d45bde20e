"""
Caller identity extraction from the API Gateway authorizer context.
"""

from typing import Optional

from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent

from clink.handlers.utils.errors import AuthenticationError


def get_caller_uid(event: APIGatewayProxyEvent) -> Optional[str]:
    """Return the authenticated caller's uid (JWT ``sub`` claim or authorizer principal), if any."""
    request_context = event.raw_event.get('requestContext') or {}
    authorizer = request_context.get('authorizer') or {}
    claims = authorizer.get('claims') or {}
    return claims.get('sub') or authorizer.get('principalId') or None


def require_caller_uid(event: APIGatewayProxyEvent, message: str = 'Unauthorized') -> str:
    uid = get_caller_uid(event)
    if not uid:
        raise AuthenticationError(message=message)
    return uid
