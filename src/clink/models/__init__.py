"""
Clink Models Package

Pydantic models for request validation, response serialization and the stored
documents (hire requests, parties, receipts).
"""

from .input import CreatePaymentIntentRequest, GenerateReceiptRequest, PasswordResetRequest
from .output import (
    AccountLinkOutput,
    GenerateReceiptOutput,
    PaymentIntentOutput,
    SuccessOutput,
    VerifyAccountOutput,
)
from .domain import HireRequest, Party, Receipt, format_amount, make_invoice_number

__all__ = [
    # Input models
    "CreatePaymentIntentRequest",
    "GenerateReceiptRequest",
    "PasswordResetRequest",

    # Output models
    "AccountLinkOutput",
    "GenerateReceiptOutput",
    "PaymentIntentOutput",
    "SuccessOutput",
    "VerifyAccountOutput",

    # Domain models
    "HireRequest",
    "Party",
    "Receipt",
    "format_amount",
    "make_invoice_number",
]
