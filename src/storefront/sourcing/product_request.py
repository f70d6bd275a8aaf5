"""ProductRequest aggregate: a customer's sourcing inquiry and the shop's answer.

State Machine:
    PENDING → QUOTED | REJECTED (admin response, exactly once)

ACCEPTED is a recognised status value, but nothing transitions into it.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.email import is_valid_email
from storefront.shared.money import format_amount
from storefront.sourcing.events import (
    ProductRequestQuoted,
    ProductRequestRejected,
    ProductRequestSubmitted,
)


class ProductRequestStatus(Enum):
    PENDING = "pending"
    QUOTED = "quoted"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


RESPONSE_STATUSES = (ProductRequestStatus.QUOTED, ProductRequestStatus.REJECTED)


@storefront.aggregate
class ProductRequest:
    user_id = Identifier(required=True)
    description = Text(required=True)
    quantity = Integer(min_value=1)
    budget_range = String(max_length=100)
    email = String(required=True, max_length=254)
    status = String(choices=ProductRequestStatus, default=ProductRequestStatus.PENDING.value)
    admin_response = Text()
    quoted_price = String(max_length=20)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def contact_email_must_be_valid(self):
        if not is_valid_email(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @invariant.post
    def quoted_requests_carry_a_response(self):
        if self.status == ProductRequestStatus.QUOTED.value and not self.admin_response:
            raise ValidationError({"admin_response": ["A quote needs a response message"]})

    @classmethod
    def submit(cls, user_id, description, email, quantity=None, budget_range=None):
        if not description or not description.strip():
            raise ValidationError({"description": ["Describe the product you are looking for"]})

        now = datetime.now(UTC)
        request = cls(
            user_id=user_id,
            description=description.strip(),
            quantity=quantity,
            budget_range=budget_range,
            email=email.strip(),
            status=ProductRequestStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        request.raise_(
            ProductRequestSubmitted(
                request_id=str(request.id),
                user_id=str(user_id),
                quantity=quantity,
                email=request.email,
                submitted_at=now,
            )
        )
        return request

    def respond(self, status, admin_response, quoted_price=None):
        """Answer a pending request with a quote or a rejection."""
        current = ProductRequestStatus(self.status)
        if current != ProductRequestStatus.PENDING:
            raise ValidationError({"status": [f"Request was already answered ({current.value})"]})

        try:
            target = ProductRequestStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown request status: {status}"]}) from None
        if target not in RESPONSE_STATUSES:
            allowed = ", ".join(s.value for s in RESPONSE_STATUSES)
            raise ValidationError({"status": [f"Response status must be one of: {allowed}"]})

        price = None
        if quoted_price not in (None, ""):
            try:
                price = format_amount(quoted_price)
            except ValueError:
                raise ValidationError({"quoted_price": [f"Invalid price: {quoted_price!r}"]}) from None

        now = datetime.now(UTC)
        with atomic_change(self):
            self.admin_response = admin_response
            self.quoted_price = price
            self.status = target.value
            self.updated_at = now

        if target == ProductRequestStatus.QUOTED:
            self.raise_(
                ProductRequestQuoted(
                    request_id=str(self.id),
                    user_id=str(self.user_id),
                    quoted_price=price,
                    responded_at=now,
                )
            )
        else:
            self.raise_(
                ProductRequestRejected(
                    request_id=str(self.id),
                    user_id=str(self.user_id),
                    responded_at=now,
                )
            )


@storefront.repository(part_of=ProductRequest)
class ProductRequestRepository:
    def for_user(self, user_id, limit: int | None = None, offset: int = 0) -> list[ProductRequest]:
        query = self._dao.query.filter(user_id=str(user_id)).order_by("-created_at")
        return query.offset(offset).limit(limit).all().items

    def recent(self, limit: int | None = None, offset: int = 0) -> list[ProductRequest]:
        return self._dao.query.order_by("-created_at").offset(offset).limit(limit).all().items

    def pending(self) -> list[ProductRequest]:
        return self._dao.query.filter(status=ProductRequestStatus.PENDING.value).limit(None).all().items
