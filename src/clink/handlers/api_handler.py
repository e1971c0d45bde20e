"""
Clink API Handler - Lambda entry point for every Clink route.

Includes the route families into the shared REST resolver and wraps resolution
with Powertools logging, tracing and metrics.
"""

import json
import os
from typing import Any, Dict

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from clink.handlers import accounts_handler, password_reset_handler, payments_handler, receipts_handler
from clink.handlers.utils.observability import logger, metrics, tracer
from clink.handlers.utils.rest_api_resolver import app

app.include_router(password_reset_handler.router)
app.include_router(payments_handler.router)
app.include_router(receipts_handler.router)
app.include_router(accounts_handler.router)


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler function.

    Args:
        event: API Gateway REST event
        context: Lambda context object

    Returns:
        API Gateway response
    """
    try:
        metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)
        tracer.put_annotation("environment", os.environ.get("ENVIRONMENT", "unknown"))

        return app.resolve(event, context)

    except Exception as e:
        metrics.add_metric(name="RequestError", unit=MetricUnit.Count, value=1)

        logger.exception("Unhandled error in lambda handler", extra={"error": str(e)})

        error_response = {
            "error": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
                "error_id": context.aws_request_id,
            }
        }

        return {
            "statusCode": 500,
            "headers": {"Content-Type": "application/json"},
            "body": json.dumps(error_response),
            "isBase64Encoded": False,
        }
