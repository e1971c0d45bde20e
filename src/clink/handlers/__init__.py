"""
Clink Lambda Handlers Module.

The handler layer parses requests, checks caller identity and maps service
errors to HTTP responses. Each route family lives in its own module with a
Powertools ``Router``; ``api_handler`` includes them into one REST resolver:

- password_reset_handler: POST /password-reset
- payments_handler: POST /payment-intents
- receipts_handler: POST /receipts
- accounts_handler: POST /stripe/account-link, POST /stripe/verify
"""

from clink.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
