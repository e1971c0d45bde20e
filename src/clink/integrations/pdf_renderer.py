"""
PDF rendering of receipts with ReportLab.
"""

from dataclasses import dataclass
from typing import List, Optional

from reportlab.lib.pagesizes import LETTER
from reportlab.pdfgen import canvas

from clink.handlers.utils.observability import tracer

MARGIN = 72
TITLE_FONT = ('Helvetica-Bold', 20)
BODY_FONT = ('Helvetica', 14)
LINE_HEIGHT = 22


@dataclass(frozen=True)
class ReceiptDocument:
    """Content of a rendered receipt."""

    title: str
    invoice_number: str
    hire_request_id: str
    formatted_amount: str
    payee_account_id: Optional[str]
    payer_email: str
    payee_email: str

    def lines(self) -> List[str]:
        return [
            f"Invoice #: {self.invoice_number}",
            f"Hire Request ID: {self.hire_request_id}",
            f"Amount Paid: {self.formatted_amount}",
            f"Creator Stripe Account: {self.payee_account_id or '-'}",
            f"Business Email: {self.payer_email}",
            f"Creator Email: {self.payee_email}",
        ]


@tracer.capture_method
def render_receipt_pdf(document: ReceiptDocument, path: str) -> str:
    """Render the receipt to ``path`` and return the path once the file is closed."""
    c = canvas.Canvas(path, pagesize=LETTER)
    c.setTitle(f"{document.title} {document.invoice_number}")
    width, height = LETTER
    y = height - MARGIN

    c.setFont(*TITLE_FONT)
    c.drawCentredString(width / 2, y, document.title)
    y -= LINE_HEIGHT * 2

    c.setFont(*BODY_FONT)
    for line in document.lines():
        if y < MARGIN:
            c.showPage()
            c.setFont(*BODY_FONT)
            y = height - MARGIN
        c.drawString(MARGIN, y, line)
        y -= LINE_HEIGHT

    c.save()
    return path
