"""Payment queries and planner/admin payment actions."""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from use_cases.booking_actions import Receipt, require_role
from use_cases.booking_models import Payment
from use_cases.booking_query import AUTH_REQUIRED_MESSAGE, error_message
from use_cases.errors import ClientError, ValidationError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentSummary:
    total_payments: int = 0
    total_amount: float = 0.0
    verified_amount: float = 0.0
    pending_amount: float = 0.0
    total_invoices: int = 0

    @classmethod
    def from_api(cls, data: Optional[Mapping[str, Any]]) -> "PaymentSummary":
        data = data or {}
        return cls(
            total_payments=int(data.get("total_payments") or 0),
            total_amount=float(data.get("total_amount") or 0),
            verified_amount=float(data.get("verified_amount") or 0),
            pending_amount=float(data.get("pending_amount") or 0),
            total_invoices=int(data.get("total_invoices") or 0),
        )


@dataclass(frozen=True)
class Invoice:
    booking_id: int
    package_title: str
    package_price: float
    business_name: str
    wedding_date: Optional[str]
    booking_status: str
    total_paid: float
    balance: float
    invoice_status: str
    payments: List[Payment] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Invoice":
        return cls(
            booking_id=data.get("booking_id"),
            package_title=data.get("package_title") or "",
            package_price=float(data.get("package_price") or 0),
            business_name=data.get("business_name") or "",
            wedding_date=data.get("wedding_date"),
            booking_status=data.get("booking_status") or "",
            total_paid=float(data.get("total_paid") or 0),
            balance=float(data.get("balance") or 0),
            invoice_status=data.get("invoice_status") or "pending",
            payments=[Payment.from_api(p) for p in data.get("payments") or []],
        )


class ClientPaymentsQuery:
    """Payments, invoices and totals for the logged-in client."""

    def __init__(self, api, session_store):
        self.api = api
        self.session_store = session_store
        self.payments: List[Payment] = []
        self.invoices: List[Invoice] = []
        self.summary = PaymentSummary()
        self.loading = False
        self.error: Optional[str] = None

    def fetch(self) -> bool:
        store = self.session_store
        if not store.is_authenticated or store.user is None or store.user.role != "client":
            self.error = AUTH_REQUIRED_MESSAGE
            return False

        self.loading = True
        self.error = None
        try:
            data = self.api.get("/payments/my-payments")
            payments = [Payment.from_api(p) for p in data.get("payments") or []]
            invoices = [Invoice.from_api(i) for i in data.get("invoices") or []]
            summary = PaymentSummary.from_api(data.get("summary"))
        except (ClientError, AttributeError, TypeError, ValueError) as e:
            self.error = error_message(e, "Failed to fetch payments")
            log.error(f"❌ Failed to fetch payments: {e}")
            return False
        finally:
            self.loading = False

        self.payments, self.invoices, self.summary = payments, invoices, summary
        return True

    refetch = fetch


def create_payment(api, session_store, booking_id, amount: float, receipt: Optional[Receipt] = None) -> dict:
    require_role(session_store, "client", "planner", "admin")
    if amount is None or amount <= 0:
        raise ValidationError("Payment amount must be greater than zero.")

    data = {"bookingId": str(booking_id), "amount": str(amount)}
    files = {"receiptFile": receipt} if receipt else None
    result = api.post("/payments", data=data, files=files)
    log.info(f"Receipt uploaded for booking {booking_id}")
    return result


def verify_payment(api, session_store, payment_id, notes: Optional[str] = None) -> dict:
    require_role(session_store, "planner", "admin")
    result = api.put(f"/payments/{payment_id}/verify", json={"notes": notes})
    log.info(f"✅ Payment {payment_id} verified by {session_store.user.role} {session_store.user.user_id}")
    return result


def reject_payment(api, session_store, payment_id, reason: str) -> dict:
    require_role(session_store, "planner", "admin")
    reason = (reason or "").strip()
    if not reason:
        raise ValidationError("Please provide a reason for rejecting this payment.")

    result = api.put(f"/payments/{payment_id}/reject", json={"notes": reason})
    log.info(f"Payment {payment_id} rejected by {session_store.user.role} {session_store.user.user_id}")
    return result


def fetch_invoice(api, session_store, booking_id) -> dict:
    require_role(session_store, "client", "planner", "admin")
    return api.get(f"/payments/invoice/{booking_id}")
