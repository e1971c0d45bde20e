"""
Business Logic Layer Module.

Each service coordinates the collaborators for one family of handlers:

- ReceiptService: render, upload, record and email hire request receipts
- PaymentService: fee-split payment intents
- AccountService: connected account onboarding and verification
- PasswordResetService: password reset emails

Services receive their collaborators explicitly so tests can pass doubles.
"""

from clink.logic.account_service import AccountService
from clink.logic.password_reset_service import PasswordResetService
from clink.logic.payment_service import PaymentService, compute_platform_fee
from clink.logic.receipt_service import ReceiptResult, ReceiptService

__all__ = [
    "AccountService",
    "PasswordResetService",
    "PaymentService",
    "ReceiptResult",
    "ReceiptService",
    "compute_platform_fee",
]
