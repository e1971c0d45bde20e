"""
Receipts Handler - generates and delivers the receipt of a hire request.
"""

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.event_handler.api_gateway import Router

from clink.dependencies import get_collaborators
from clink.handlers.utils.observability import logger, tracer
from clink.handlers.utils.rest_api_resolver import RECEIPTS_PATH, json_response, parse_body
from clink.logic.receipt_service import ReceiptService
from clink.models.input import GenerateReceiptRequest
from clink.models.output import GenerateReceiptOutput

router = Router()


def get_receipt_service() -> ReceiptService:
    collaborators = get_collaborators()
    return ReceiptService(
        store=collaborators.store,
        media=collaborators.media,
        mailer=collaborators.mailer,
        folder=collaborators.env.RECEIPTS_FOLDER,
    )


@router.post(RECEIPTS_PATH)
@tracer.capture_method
def generate_receipt() -> Response:
    """
    Generate a receipt for a hire request.

    Returns:
        ``{"success": true, "downloadUrl": ...}``
    """
    request = parse_body(router.current_event, GenerateReceiptRequest)
    logger.info('Generate receipt request received', extra={'hire_request_id': request.hire_request_id})

    result = get_receipt_service().generate_receipt(request.hire_request_id)

    return json_response(200, GenerateReceiptOutput(download_url=result.download_url).to_json())
