"""
Input models for request validation using Pydantic.

Request payloads use the camelCase field names the mobile client sends.
"""

import re
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class PasswordResetRequest(RequestModel):
    """Request model for sending a password reset email."""

    email: Annotated[str, Field(
        min_length=1,
        description='Email address of the account to reset',
        examples=['jane@example.com']
    )]

    @field_validator('email')
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate email format."""
        if not EMAIL_PATTERN.match(v):
            raise ValueError('Invalid email format')
        return v


class CreatePaymentIntentRequest(RequestModel):
    """Request model for creating a fee-split payment intent."""

    amount: Annotated[int, Field(
        strict=True,
        description='Amount to charge, in minor currency units',
        examples=[10000]
    )]

    currency: Annotated[str, Field(
        default='usd',
        description='ISO currency code',
        examples=['usd']
    )] = 'usd'

    destination_account_id: Annotated[str, Field(
        alias='creatorStripeAccountId',
        min_length=1,
        description='Stripe connected account receiving the transfer',
        examples=['acct_1Nxyz']
    )]

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: int) -> int:
        # Field(gt=0) exports incorrectly to OpenAPI docs
        if v <= 0:
            raise ValueError('amount must be greater than 0')
        return v

    @field_validator('currency')
    @classmethod
    def validate_currency(cls, v: str) -> str:
        v = v.lower()
        if not re.fullmatch(r'[a-z]{3}', v):
            raise ValueError('currency must be a 3-letter ISO code')
        return v


class GenerateReceiptRequest(RequestModel):
    """Request model for generating a hire request receipt."""

    hire_request_id: Annotated[str, Field(
        alias='hireRequestId',
        min_length=1,
        description='Hire request the receipt is generated for',
        examples=['hr_8f2c']
    )]
