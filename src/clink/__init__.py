"""
Clink serverless functions.

Request handlers that connect the Clink app to DynamoDB, Firebase Auth, Stripe
Connect, an SMTP relay, ReportLab and Cloudinary:

- handlers: API Gateway routes and the Lambda entry point
- logic: workflows coordinating the collaborators
- dal: document store access
- integrations: third-party SDK wrappers
- models: request, response and document schemas
"""

__version__ = "1.0.0"
