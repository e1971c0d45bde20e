"""
Domain models for the documents the Clink handlers read and write.

Stored documents use camelCase attribute names; the models expose snake_case
attributes and keep the stored names as aliases.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

RECEIPT_TITLE = 'Clink Receipt'
INVOICE_PREFIX = 'CLINK-'


def format_amount(amount: int) -> str:
    """Format a minor-unit amount as a two-decimal dollar string (2599 -> "$25.99")."""
    return f"${Decimal(amount) / 100:.2f}"


def make_invoice_number(now: Optional[datetime] = None) -> str:
    """Build an invoice number from the trailing 6 digits of the epoch milliseconds."""
    now = now or datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    return f"{INVOICE_PREFIX}{str(millis)[-6:]}"


class DocumentModel(BaseModel):
    """Base class for models loaded from the document store."""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the stored (camelCase, JSON-compatible) representation."""
        return self.model_dump(by_alias=True, mode='json', exclude_none=True)


class HireRequest(DocumentModel):
    """A paid engagement between a paying business and a receiving creator."""

    id: Annotated[str, Field(min_length=1)]

    amount: Annotated[int, Field(
        ge=0,
        description='Amount paid, in minor currency units'
    )]

    payer_id: Annotated[str, Field(alias='businessId', min_length=1)]

    payee_id: Annotated[str, Field(alias='creatorId', min_length=1)]

    payee_account_id: Annotated[Optional[str], Field(
        default=None,
        alias='creatorStripeAccountId',
        description='Stripe connected account receiving the payment'
    )] = None

    @field_validator('amount', mode='before')
    @classmethod
    def coerce_decimal_amount(cls, v: Any) -> Any:
        # DynamoDB returns numbers as Decimal
        if isinstance(v, Decimal) and v == v.to_integral_value():
            return int(v)
        return v

    @property
    def formatted_amount(self) -> str:
        return format_amount(self.amount)


class Party(DocumentModel):
    """A platform user."""

    id: Annotated[str, Field(min_length=1)]

    email: Annotated[str, Field(min_length=1)]

    stripe_account_id: Annotated[Optional[str], Field(
        default=None,
        alias='stripeAccountId'
    )] = None

    stripe_verified: Annotated[Optional[bool], Field(
        default=None,
        alias='stripeVerified'
    )] = None


class Receipt(DocumentModel):
    """Summary record of a generated receipt, keyed by hire request id."""

    hire_request_id: Annotated[str, Field(alias='hireRequestId', min_length=1)]

    invoice_number: Annotated[str, Field(alias='invoiceNumber')]

    amount: Annotated[int, Field(ge=0)]

    created_at: Annotated[datetime, Field(
        alias='createdAt',
        default_factory=lambda: datetime.now(timezone.utc)
    )]

    payer_id: Annotated[str, Field(alias='businessId')]

    payee_id: Annotated[str, Field(alias='creatorId')]

    download_url: Annotated[str, Field(alias='downloadUrl', min_length=1)]

    @classmethod
    def for_hire_request(
        cls,
        hire_request: HireRequest,
        invoice_number: str,
        download_url: str,
        created_at: Optional[datetime] = None,
    ) -> 'Receipt':
        """Create a receipt whose amount and parties mirror the hire request."""
        return cls(
            created_at=created_at or datetime.now(timezone.utc),
            hire_request_id=hire_request.id,
            invoice_number=invoice_number,
            amount=hire_request.amount,
            payer_id=hire_request.payer_id,
            payee_id=hire_request.payee_id,
            download_url=download_url,
        )
