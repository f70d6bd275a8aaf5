"""Domain tests for the ProductRequest aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.sourcing.events import ProductRequestQuoted, ProductRequestRejected, ProductRequestSubmitted
from storefront.sourcing.product_request import ProductRequest, ProductRequestStatus


def _request(**overrides):
    defaults = {
        "user_id": "user-001",
        "description": "Left-handed teapot, blue glaze",
        "email": "jane@example.com",
        "quantity": 2,
        "budget_range": "$50-$100",
    }
    defaults.update(overrides)
    return ProductRequest.submit(**defaults)


class TestSubmission:
    def test_new_requests_are_pending(self):
        request = _request()
        assert request.status == ProductRequestStatus.PENDING.value
        assert isinstance(request._events[0], ProductRequestSubmitted)

    def test_blank_description_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _request(description="   ")
        assert "description" in exc.value.messages

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _request(email="not-an-email")
        assert "email" in exc.value.messages


class TestAdminResponse:
    def test_quote(self):
        request = _request()
        request.respond(status="quoted", admin_response="We can get it in two weeks", quoted_price="79.9")

        assert request.status == "quoted"
        assert request.quoted_price == "79.90"
        assert any(isinstance(e, ProductRequestQuoted) for e in request._events)

    def test_reject(self):
        request = _request()
        request.respond(status="rejected", admin_response="Not available")

        assert request.status == "rejected"
        assert request.quoted_price is None
        assert any(isinstance(e, ProductRequestRejected) for e in request._events)

    def test_only_pending_requests_can_be_answered(self):
        request = _request()
        request.respond(status="rejected", admin_response="Not available")
        with pytest.raises(ValidationError):
            request.respond(status="quoted", admin_response="Found one", quoted_price="10")

    @pytest.mark.parametrize("status", ["accepted", "pending", "shipped"])
    def test_only_quote_or_reject(self, status):
        request = _request()
        with pytest.raises(ValidationError) as exc:
            request.respond(status=status, admin_response="Hmm")
        assert "status" in exc.value.messages
        assert request.status == "pending"

    def test_quote_needs_response_text(self):
        request = _request()
        with pytest.raises(ValidationError):
            request.respond(status="quoted", admin_response=None, quoted_price="10")

    def test_invalid_quoted_price(self):
        request = _request()
        with pytest.raises(ValidationError) as exc:
            request.respond(status="quoted", admin_response="Sure", quoted_price="cheap")
        assert "quoted_price" in exc.value.messages
