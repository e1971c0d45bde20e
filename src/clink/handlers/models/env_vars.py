"""
Environment variable models for type-safe configuration.

This module defines the Pydantic model for the environment variables read by the
Clink Lambda function, validated with aws-lambda-env-modeler.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import BaseModel, get_environment_variables
from pydantic import Field


class ClinkEnvVars(BaseModel):
    """Environment variables for the Clink handlers."""

    # DynamoDB tables, one per document collection
    USERS_TABLE_NAME: Annotated[str, Field(
        description='DynamoDB table holding party (user) documents',
        min_length=1
    )]

    HIRE_REQUESTS_TABLE_NAME: Annotated[str, Field(
        description='DynamoDB table holding hire request documents',
        min_length=1
    )]

    RECEIPTS_TABLE_NAME: Annotated[str, Field(
        description='DynamoDB table receiving generated receipts',
        min_length=1
    )]

    # For local testing against dynamodb-local
    DYNAMODB_ENDPOINT: Annotated[Optional[str], Field(
        default=None,
        description='Override endpoint URL for DynamoDB'
    )] = None

    # Secrets Manager secret names, each holding a JSON document
    MAIL_SECRET_NAME: Annotated[str, Field(
        default='clink/smtp',
        description='Secret with SMTP "user" and "password"'
    )] = 'clink/smtp'

    STRIPE_SECRET_NAME: Annotated[str, Field(
        default='clink/stripe',
        description='Secret with Stripe "secret_key"'
    )] = 'clink/stripe'

    CLOUDINARY_SECRET_NAME: Annotated[str, Field(
        default='clink/cloudinary',
        description='Secret with Cloudinary "cloud_name", "api_key" and "api_secret"'
    )] = 'clink/cloudinary'

    FIREBASE_SECRET_NAME: Annotated[str, Field(
        default='clink/firebase',
        description='Secret holding the Firebase service account JSON'
    )] = 'clink/firebase'

    SECRETS_MAX_AGE_SECONDS: Annotated[int, Field(
        default=300,
        description='How long fetched secrets are cached in the execution environment',
        ge=0,
        le=3600
    )] = 300

    # Mail relay
    SMTP_HOST: Annotated[str, Field(
        default='smtp.zoho.com',
        description='SMTP relay host'
    )] = 'smtp.zoho.com'

    SMTP_PORT: Annotated[int, Field(
        default=465,
        description='SMTP relay port (implicit TLS)',
        ge=1,
        le=65535
    )] = 465

    # Media host
    RECEIPTS_FOLDER: Annotated[str, Field(
        default='receipts',
        description='Media host folder for rendered receipts',
        min_length=1
    )] = 'receipts'

    # Stripe onboarding redirects
    STRIPE_REFRESH_URL: Annotated[str, Field(
        default='https://clinkapp.org/stripe-refresh',
        description='Where Stripe sends a party whose onboarding link expired'
    )] = 'https://clinkapp.org/stripe-refresh'

    STRIPE_RETURN_URL: Annotated[str, Field(
        default='https://clinkapp.org/stripe-return',
        description='Where Stripe sends a party after onboarding'
    )] = 'https://clinkapp.org/stripe-return'

    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='clink-functions',
        description='Service name for AWS Powertools'
    )] = 'clink-functions'

    LOG_LEVEL: Annotated[str, Field(
        default='INFO',
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'


def get_handler_env_vars() -> ClinkEnvVars:
    """
    Get typed environment variables for the handlers.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=ClinkEnvVars)
