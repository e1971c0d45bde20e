"""
Pytest configuration and shared fixtures for the Clink functions.

This module provides the test environment, in-memory collaborator doubles,
API Gateway event builders and moto-backed DynamoDB tables.
"""

import json
import os
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence
from unittest.mock import Mock

import pytest

# Set before any clink module creates its Powertools instances
os.environ.update({
    "AWS_DEFAULT_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "test",
    "AWS_SECRET_ACCESS_KEY": "test",
    "ENVIRONMENT": "test",
    "POWERTOOLS_SERVICE_NAME": "test-clink-functions",
    "POWERTOOLS_METRICS_NAMESPACE": "TestClinkFunctions",
    "POWERTOOLS_TRACE_DISABLED": "true",
    "LOG_LEVEL": "DEBUG",
})

from clink.dal import HIRE_REQUESTS, RECEIPTS, USERS  # noqa: E402
from clink.dependencies import Collaborators, set_collaborators  # noqa: E402
from clink.handlers.models.env_vars import ClinkEnvVars  # noqa: E402
from clink.handlers.utils.errors import ResourceNotFoundError  # noqa: E402

TABLE_NAMES = {
    USERS: "test-users",
    HIRE_REQUESTS: "test-hire-requests",
    RECEIPTS: "test-receipts",
}


# Collaborator doubles
class InMemoryDocumentStore:
    """Dict-backed document store recording every write."""

    def __init__(self):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.writes: List[tuple] = []
        self._lock = threading.Lock()

    def seed(self, collection: str, document_id: str, data: Mapping[str, Any]) -> None:
        self.collections.setdefault(collection, {})[document_id] = {**data, "id": document_id}

    def get_document(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        doc = self.collections.get(collection, {}).get(document_id)
        return dict(doc) if doc is not None else None

    def set_document(self, collection: str, document_id: str, data: Mapping[str, Any]) -> None:
        with self._lock:
            self.writes.append(("set", collection, document_id, dict(data)))
            self.collections.setdefault(collection, {})[document_id] = {**data, "id": document_id}

    def update_document(self, collection: str, document_id: str, fields: Mapping[str, Any]) -> None:
        with self._lock:
            doc = self.collections.get(collection, {}).get(document_id)
            if doc is None:
                raise ResourceNotFoundError(resource_type="Document", resource_id=f"{collection}/{document_id}")
            self.writes.append(("update", collection, document_id, dict(fields)))
            doc.update(fields)


class FakeAuthProvider:
    def __init__(self, known_emails: Sequence[str] = ()):
        self.known_emails = set(known_emails)
        self.requested: List[str] = []

    def generate_password_reset_link(self, email: str) -> str:
        self.requested.append(email)
        if email not in self.known_emails:
            raise ResourceNotFoundError(resource_type="User", resource_id=email)
        return f"https://clink.firebaseapp.com/__/auth/action?mode=resetPassword&oobCode=code-{len(self.requested)}"


class FakePaymentGateway:
    def __init__(self):
        self.payment_intents: List[Dict[str, Any]] = []
        self.created_accounts: List[str] = []
        self.links: List[Dict[str, str]] = []
        self.accounts: Dict[str, Dict[str, Any]] = {}

    def create_payment_intent(self, amount, currency, application_fee_amount, destination_account_id):
        self.payment_intents.append({
            "amount": amount,
            "currency": currency,
            "application_fee_amount": application_fee_amount,
            "destination_account_id": destination_account_id,
        })
        n = len(self.payment_intents)
        return {"id": f"pi_{n}", "client_secret": f"pi_{n}_secret_test"}

    def create_express_account(self, email: str) -> str:
        account_id = f"acct_test{len(self.created_accounts) + 1}"
        self.created_accounts.append(email)
        self.accounts[account_id] = {"id": account_id, "details_submitted": False, "charges_enabled": False}
        return account_id

    def create_onboarding_link(self, account_id: str, refresh_url: str, return_url: str) -> str:
        self.links.append({"account_id": account_id, "refresh_url": refresh_url, "return_url": return_url})
        return f"https://connect.stripe.com/setup/e/{account_id}/onboarding"

    def retrieve_account(self, account_id: str) -> Mapping[str, Any]:
        return self.accounts[account_id]


class FakeMediaHost:
    """Records uploads; reads the file so the rendered bytes can be inspected."""

    def __init__(self, error: Optional[Exception] = None):
        self.uploads: List[Dict[str, Any]] = []
        self.error = error

    def upload(self, file_path: str, folder: str, public_id: str) -> str:
        with open(file_path, "rb") as f:
            content = f.read()
        self.uploads.append({"path": file_path, "folder": folder, "public_id": public_id, "content": content})
        if self.error is not None:
            raise self.error
        return f"https://res.cloudinary.com/clink/raw/upload/v{len(self.uploads)}/{folder}/{public_id}"


class FakeMailer:
    def __init__(self, error: Optional[Exception] = None):
        self.sent: List[Dict[str, Any]] = []
        self.error = error

    def send(self, sender_name, to, subject, html, cc=None) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append({"sender_name": sender_name, "to": to, "cc": list(cc or []), "subject": subject, "html": html})


# Sample data
HIRE_REQUEST_ID = "hr_123"
BUSINESS_ID = "user_business"
CREATOR_ID = "user_creator"


@pytest.fixture
def store() -> InMemoryDocumentStore:
    store = InMemoryDocumentStore()
    store.seed(HIRE_REQUESTS, HIRE_REQUEST_ID, {
        "amount": 2599,
        "businessId": BUSINESS_ID,
        "creatorId": CREATOR_ID,
        "creatorStripeAccountId": "acct_creator",
        "status": "paid",
    })
    store.seed(USERS, BUSINESS_ID, {"email": "owner@business.com"})
    store.seed(USERS, CREATOR_ID, {"email": "creator@example.com", "stripeAccountId": "acct_creator"})
    return store


@pytest.fixture
def auth() -> FakeAuthProvider:
    return FakeAuthProvider(known_emails=["owner@business.com"])


@pytest.fixture
def payments() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def media() -> FakeMediaHost:
    return FakeMediaHost()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def env_vars() -> ClinkEnvVars:
    return ClinkEnvVars(
        USERS_TABLE_NAME=TABLE_NAMES[USERS],
        HIRE_REQUESTS_TABLE_NAME=TABLE_NAMES[HIRE_REQUESTS],
        RECEIPTS_TABLE_NAME=TABLE_NAMES[RECEIPTS],
    )


@pytest.fixture
def collaborators(store, auth, payments, media, mailer, env_vars):
    """Install the doubles as the handlers' collaborators."""
    container = Collaborators(store=store, auth=auth, payments=payments, media=media, mailer=mailer, env=env_vars)
    set_collaborators(container)
    yield container
    set_collaborators(None)


# API Gateway fixtures
@pytest.fixture
def api_gateway_event():
    """Build API Gateway REST events; ``uid`` adds authorizer claims."""

    def build(path: str, body: Any = None, uid: Optional[str] = None, method: str = "POST") -> Dict[str, Any]:
        request_context: Dict[str, Any] = {
            "requestId": "test-request-id-123",
            "accountId": "123456789012",
            "stage": "test",
            "httpMethod": method,
            "path": path,
            "resourcePath": path,
            "identity": {"sourceIp": "127.0.0.1", "userAgent": "test-agent/1.0"},
        }
        if uid is not None:
            request_context["authorizer"] = {"claims": {"sub": uid, "email_verified": "true"}}

        return {
            "resource": path,
            "path": path,
            "httpMethod": method,
            "headers": {"Content-Type": "application/json"},
            "multiValueHeaders": {},
            "queryStringParameters": None,
            "multiValueQueryStringParameters": None,
            "pathParameters": None,
            "stageVariables": None,
            "requestContext": request_context,
            "body": body if body is None or isinstance(body, str) else json.dumps(body),
            "isBase64Encoded": False,
        }

    return build


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-clink-api"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-clink-api"
    context.memory_limit_in_mb = "512"
    context.remaining_time_in_millis = lambda: 30000
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-clink-api"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    return context


# DynamoDB fixtures
@pytest.fixture
def dynamodb_tables():
    """Create mock DynamoDB tables, one per collection."""
    import boto3
    from moto import mock_aws

    with mock_aws():
        client = boto3.client("dynamodb", region_name="us-east-1")
        for table_name in TABLE_NAMES.values():
            client.create_table(
                TableName=table_name,
                KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
                AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
                BillingMode="PAY_PER_REQUEST",
            )
        yield client


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
