"""
Unit tests for the receipt workflow.
"""

import os
from datetime import datetime, timezone

import pytest

from clink.dal import HIRE_REQUESTS, RECEIPTS, USERS
from clink.handlers.utils.errors import DataIntegrityError, ExternalServiceError, ResourceNotFoundError, ValidationError
from clink.logic import receipt_service as receipt_module
from clink.logic.receipt_service import RECEIPT_SUBJECT, ReceiptService

from conftest import BUSINESS_ID, CREATOR_ID, HIRE_REQUEST_ID, FakeMailer, FakeMediaHost

FIXED_NOW = datetime(2024, 3, 1, 12, 0, 0, 123000, tzinfo=timezone.utc)


@pytest.fixture
def service(store, media, mailer) -> ReceiptService:
    return ReceiptService(store=store, media=media, mailer=mailer, clock=lambda: FIXED_NOW)


@pytest.fixture
def rendered_documents(monkeypatch):
    """Capture every document handed to the PDF renderer."""
    captured = []
    real_render = receipt_module.render_receipt_pdf

    def spy(document, path):
        captured.append(document)
        return real_render(document, path)

    monkeypatch.setattr(receipt_module, "render_receipt_pdf", spy)
    return captured


class TestGenerateReceipt:
    """Test cases for ReceiptService.generate_receipt."""

    def test_returns_download_url(self, service, media):
        result = service.generate_receipt(HIRE_REQUEST_ID)

        assert result.download_url.startswith("https://")
        assert result.download_url.endswith(f"receipts/{HIRE_REQUEST_ID}")
        assert len(media.uploads) == 1

    def test_invoice_number_uses_timestamp_suffix(self, service):
        result = service.generate_receipt(HIRE_REQUEST_ID)

        millis = str(int(FIXED_NOW.timestamp() * 1000))
        assert result.invoice_number == f"CLINK-{millis[-6:]}"

    def test_uploads_rendered_pdf_under_receipts_folder(self, service, media):
        service.generate_receipt(HIRE_REQUEST_ID)

        upload = media.uploads[0]
        assert upload["folder"] == "receipts"
        assert upload["public_id"] == HIRE_REQUEST_ID
        assert upload["content"].startswith(b"%PDF")

    def test_writes_receipt_matching_hire_request(self, service, store):
        result = service.generate_receipt(HIRE_REQUEST_ID)

        receipts = [w for w in store.writes if w[1] == RECEIPTS]
        assert len(receipts) == 1
        _, _, document_id, data = receipts[0]
        assert document_id == HIRE_REQUEST_ID
        assert data.pop("createdAt").startswith("2024-03-01T12:00:00")
        assert data == {
            "hireRequestId": HIRE_REQUEST_ID,
            "invoiceNumber": result.invoice_number,
            "amount": 2599,
            "businessId": BUSINESS_ID,
            "creatorId": CREATOR_ID,
            "downloadUrl": result.download_url,
        }

    def test_emails_payer_and_copies_payee(self, service, mailer):
        result = service.generate_receipt(HIRE_REQUEST_ID)

        assert len(mailer.sent) == 1
        email = mailer.sent[0]
        assert email["to"] == "owner@business.com"
        assert email["cc"] == ["creator@example.com"]
        assert email["subject"] == RECEIPT_SUBJECT
        assert email["sender_name"] == "Clink Receipts"
        assert result.invoice_number in email["html"]
        assert "$25.99" in email["html"]
        assert result.download_url in email["html"]

    def test_rendered_document_content(self, service, rendered_documents):
        result = service.generate_receipt(HIRE_REQUEST_ID)

        document = rendered_documents[0]
        assert document.title == "Clink Receipt"
        assert document.formatted_amount == "$25.99"
        assert document.invoice_number == result.invoice_number
        assert document.payee_account_id == "acct_creator"
        assert "Business Email: owner@business.com" in document.lines()
        assert "Creator Email: creator@example.com" in document.lines()

    def test_temporary_file_is_removed(self, service, media):
        service.generate_receipt(HIRE_REQUEST_ID)

        assert not os.path.exists(media.uploads[0]["path"])

    def test_second_run_overwrites_receipt_and_sends_again(self, service, store, media, mailer):
        service.generate_receipt(HIRE_REQUEST_ID)
        second = service.generate_receipt(HIRE_REQUEST_ID)

        assert [u["public_id"] for u in media.uploads] == [HIRE_REQUEST_ID, HIRE_REQUEST_ID]
        assert list(store.collections[RECEIPTS]) == [HIRE_REQUEST_ID]
        assert store.collections[RECEIPTS][HIRE_REQUEST_ID]["downloadUrl"] == second.download_url
        assert len(mailer.sent) == 2

    @pytest.mark.parametrize("hire_request_id", ["", "   "])
    def test_empty_id_is_rejected(self, service, media, hire_request_id):
        with pytest.raises(ValidationError):
            service.generate_receipt(hire_request_id)

        assert media.uploads == []


class TestGenerateReceiptMissingRecords:
    """A missing record fails the workflow before any side effect."""

    def assert_no_side_effects(self, store, media, mailer):
        assert media.uploads == []
        assert [w for w in store.writes if w[1] == RECEIPTS] == []
        assert mailer.sent == []

    def test_missing_hire_request(self, service, store, media, mailer):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            service.generate_receipt("hr_missing")

        assert exc_info.value.resource_id == "hr_missing"
        self.assert_no_side_effects(store, media, mailer)

    def test_missing_payer(self, service, store, media, mailer):
        del store.collections[USERS][BUSINESS_ID]

        with pytest.raises(ResourceNotFoundError) as exc_info:
            service.generate_receipt(HIRE_REQUEST_ID)

        assert exc_info.value.resource_id == BUSINESS_ID
        self.assert_no_side_effects(store, media, mailer)

    def test_missing_payee(self, service, store, media, mailer):
        del store.collections[USERS][CREATOR_ID]

        with pytest.raises(ResourceNotFoundError) as exc_info:
            service.generate_receipt(HIRE_REQUEST_ID)

        assert exc_info.value.resource_id == CREATOR_ID
        self.assert_no_side_effects(store, media, mailer)

    def test_malformed_hire_request(self, service, store, media, mailer):
        del store.collections[HIRE_REQUESTS][HIRE_REQUEST_ID]["amount"]

        with pytest.raises(DataIntegrityError) as exc_info:
            service.generate_receipt(HIRE_REQUEST_ID)

        assert exc_info.value.collection == HIRE_REQUESTS
        assert exc_info.value.field_errors == [{"field": "amount", "message": "Field required"}]
        self.assert_no_side_effects(store, media, mailer)

    def test_party_without_email(self, service, store, media, mailer):
        del store.collections[USERS][CREATOR_ID]["email"]

        with pytest.raises(DataIntegrityError) as exc_info:
            service.generate_receipt(HIRE_REQUEST_ID)

        assert exc_info.value.collection == USERS
        assert exc_info.value.document_id == CREATOR_ID
        self.assert_no_side_effects(store, media, mailer)


class TestGenerateReceiptCollaboratorFailures:
    """Failures abort the remaining steps without undoing completed ones."""

    def test_upload_failure_stops_workflow_and_cleans_up(self, store, mailer):
        media = FakeMediaHost(error=ExternalServiceError(message="boom", service_name="cloudinary"))
        service = ReceiptService(store=store, media=media, mailer=mailer)

        with pytest.raises(ExternalServiceError):
            service.generate_receipt(HIRE_REQUEST_ID)

        assert not os.path.exists(os.path.dirname(media.uploads[0]["path"]))
        assert RECEIPTS not in store.collections
        assert mailer.sent == []

    def test_email_failure_keeps_written_receipt(self, store, media):
        mailer = FakeMailer(error=ExternalServiceError(message="smtp down", service_name="smtp"))
        service = ReceiptService(store=store, media=media, mailer=mailer)

        with pytest.raises(ExternalServiceError) as exc_info:
            service.generate_receipt(HIRE_REQUEST_ID)

        assert exc_info.value.service_name == "smtp"
        assert HIRE_REQUEST_ID in store.collections[RECEIPTS]
        assert len(media.uploads) == 1
