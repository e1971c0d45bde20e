"""
Output models for API responses using Pydantic.

Responses are serialized with ``by_alias=True`` so clients receive camelCase keys.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class ResponseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class SuccessOutput(ResponseModel):
    """Response model for operations that only report success."""

    success: Annotated[bool, Field(default=True)] = True


class GenerateReceiptOutput(ResponseModel):
    """Response model for a generated receipt."""

    success: Annotated[bool, Field(default=True)] = True

    download_url: Annotated[str, Field(
        alias='downloadUrl',
        description='Public URL of the uploaded PDF receipt',
        examples=['https://res.cloudinary.com/clink/raw/upload/v1/receipts/hr_8f2c']
    )]


class PaymentIntentOutput(ResponseModel):
    """Response model for a created payment intent."""

    client_secret: Annotated[str, Field(
        alias='clientSecret',
        description='Client secret used by the app to confirm the payment'
    )]


class AccountLinkOutput(ResponseModel):
    """Response model for a Stripe onboarding link."""

    url: Annotated[str, Field(description='Time-boxed onboarding URL')]


class VerifyAccountOutput(ResponseModel):
    """Response model for a sub-account verification check."""

    stripe_verified: Annotated[bool, Field(alias='stripeVerified')]
