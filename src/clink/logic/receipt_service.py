"""
Receipt workflow for completed hire requests.

Reads the hire request and both parties, renders a PDF receipt, uploads it,
records the receipt and emails both parties. Steps run in order and the first
failure aborts the rest; completed side effects are not rolled back.
"""

import os
import tempfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from aws_lambda_powertools.metrics import MetricUnit

from clink.dal import HIRE_REQUESTS, RECEIPTS, USERS, DocumentStore, parse_document
from clink.handlers.utils.errors import ResourceNotFoundError, ValidationError
from clink.handlers.utils.observability import logger, metrics, tracer
from clink.integrations import Mailer, MediaHost
from clink.integrations.pdf_renderer import ReceiptDocument, render_receipt_pdf
from clink.models.domain import RECEIPT_TITLE, HireRequest, Party, Receipt, make_invoice_number

RECEIPT_SENDER_NAME = 'Clink Receipts'
RECEIPT_SUBJECT = 'Clink Receipt - Payment Confirmed'

RECEIPT_EMAIL_TEMPLATE = """
<div style="font-family: Arial;">
  <h2>&#9989; Payment Receipt</h2>
  <p>Invoice #: <strong>{invoice_number}</strong></p>
  <p>Amount: <strong>{amount}</strong></p>
  <p><a href="{download_url}">View PDF Receipt</a></p>
</div>
"""


@dataclass(frozen=True)
class ReceiptResult:
    download_url: str
    invoice_number: str


class ReceiptService:
    """Generates, stores and delivers hire request receipts."""

    def __init__(
        self,
        store: DocumentStore,
        media: MediaHost,
        mailer: Mailer,
        folder: str = 'receipts',
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.store = store
        self.media = media
        self.mailer = mailer
        self.folder = folder
        self.clock = clock

    def _get_hire_request(self, hire_request_id: str) -> HireRequest:
        data = self.store.get_document(HIRE_REQUESTS, hire_request_id)
        if data is None:
            raise ResourceNotFoundError(resource_type='Hire request', resource_id=hire_request_id)
        return parse_document(HireRequest, HIRE_REQUESTS, hire_request_id, data)

    def _get_party(self, party_id: str) -> Optional[Party]:
        data = self.store.get_document(USERS, party_id)
        if data is None:
            return None
        return parse_document(Party, USERS, party_id, data)

    @tracer.capture_method
    def _get_parties(self, hire_request: HireRequest) -> Tuple[Party, Party]:
        with ThreadPoolExecutor(max_workers=2) as executor:
            payer_future = executor.submit(self._get_party, hire_request.payer_id)
            payee_future = executor.submit(self._get_party, hire_request.payee_id)
            payer, payee = payer_future.result(), payee_future.result()

        for party_id, party in ((hire_request.payer_id, payer), (hire_request.payee_id, payee)):
            if party is None:
                raise ResourceNotFoundError(resource_type='User', resource_id=party_id)
        return payer, payee

    def _render_and_upload(self, document: ReceiptDocument) -> str:
        # The temporary directory is removed on every exit path, upload failures included
        with tempfile.TemporaryDirectory(prefix='receipt_') as workdir:
            path = os.path.join(workdir, f'receipt_{document.hire_request_id}.pdf')
            render_receipt_pdf(document, path)
            logger.debug('Receipt rendered', extra={'path': path, 'bytes': os.path.getsize(path)})
            return self.media.upload(path, folder=self.folder, public_id=document.hire_request_id)

    @tracer.capture_method
    def generate_receipt(self, hire_request_id: str) -> ReceiptResult:
        """
        Generate the receipt for a hire request.

        Args:
            hire_request_id: Identifier of the hire request

        Returns:
            The public receipt URL and invoice number

        Raises:
            ValidationError: If the identifier is empty
            ResourceNotFoundError: If the hire request or either party is missing
            ExternalServiceError: If a collaborator call fails
        """
        if not hire_request_id or not hire_request_id.strip():
            raise ValidationError(message='Missing hireRequestId')

        tracer.put_annotation('hire_request_id', hire_request_id)

        hire_request = self._get_hire_request(hire_request_id)
        payer, payee = self._get_parties(hire_request)

        now = self.clock()
        invoice_number = make_invoice_number(now)
        document = ReceiptDocument(
            title=RECEIPT_TITLE,
            invoice_number=invoice_number,
            hire_request_id=hire_request.id,
            formatted_amount=hire_request.formatted_amount,
            payee_account_id=hire_request.payee_account_id,
            payer_email=payer.email,
            payee_email=payee.email,
        )

        download_url = self._render_and_upload(document)

        receipt = Receipt.for_hire_request(
            hire_request,
            invoice_number=invoice_number,
            download_url=download_url,
            created_at=now,
        )
        self.store.set_document(RECEIPTS, hire_request.id, receipt.to_document())

        self.mailer.send(
            sender_name=RECEIPT_SENDER_NAME,
            to=payer.email,
            cc=[payee.email],
            subject=RECEIPT_SUBJECT,
            html=RECEIPT_EMAIL_TEMPLATE.format(
                invoice_number=invoice_number,
                amount=hire_request.formatted_amount,
                download_url=download_url,
            ),
        )

        metrics.add_metric(name='ReceiptGenerated', unit=MetricUnit.Count, value=1)
        logger.info('Receipt generated', extra={
            'hire_request_id': hire_request.id,
            'invoice_number': invoice_number,
            'amount': hire_request.amount,
        })

        return ReceiptResult(download_url=download_url, invoice_number=invoice_number)
