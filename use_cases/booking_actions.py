"""Booking mutations. Unlike queries, these raise so the screen can show the failure."""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional, Tuple

from use_cases.booking_models import BookingStatus, can_transition, parse_booking_status
from use_cases.errors import AccessDenied, ValidationError

log = logging.getLogger(__name__)

PAYMENT_METHODS = ("gcash", "maya", "bank_transfer")

# (filename, content, mimetype) as accepted by requests' ``files=``
Receipt = Tuple[str, bytes, str]


def require_role(session_store, *roles: str) -> None:
    user = session_store.user if session_store.is_authenticated else None
    if user is None:
        raise AccessDenied("Authentication required")
    if user.role not in roles:
        raise AccessDenied("Insufficient permissions")


def cancel_booking(api, session_store, booking_id, reason: Optional[str] = None, require_reason: bool = False) -> dict:
    require_role(session_store, "client")
    reason = (reason or "").strip()
    if require_reason and not reason:
        raise ValidationError("Please provide a reason for cancelling this booking.")

    result = api.put(f"/bookings/my-bookings/{booking_id}/cancel", json={"reason": reason or None})
    log.info(f"Booking {booking_id} cancelled by client {session_store.user.user_id}")
    return result


def update_status(
    api,
    session_store,
    booking_id,
    status: Any,
    notes: Optional[str] = None,
    current_status: Any = None,
) -> dict:
    require_role(session_store, "planner", "admin")
    target = parse_booking_status(status)
    if target is None:
        raise ValidationError(f"Unknown booking status: {status}")

    if current_status is not None:
        current = parse_booking_status(current_status)
        if current is None or not can_transition(current, target):
            raise ValidationError(f"Cannot change a {current_status} booking to {target.value}.")

    result = api.put(f"/bookings/{booking_id}/status", json={"status": target.value, "notes": notes})
    log.info(f"Booking {booking_id} -> {target.value} by {session_store.user.role} {session_store.user.user_id}")
    return result


def confirm_booking(api, session_store, booking_id, current_status: Any = None) -> dict:
    return update_status(api, session_store, booking_id, BookingStatus.CONFIRMED, current_status=current_status)


@dataclass
class BookingDraft:
    """In-progress booking form, staged in session storage until submitted."""

    wedding_date: str = ""
    wedding_time: str = ""
    venue: str = ""
    special_requests: str = ""
    payment_method: str = ""
    payment_amount: float = 0.0
    receipt: Optional[Receipt] = field(default=None, repr=False)
    agreed_to_terms: bool = False
    agreed_to_privacy: bool = False
    allow_marketing: bool = False

    def validate_step(self, step: str, today: Optional[date] = None) -> List[str]:
        errors = []
        if step == "details":
            if not self.wedding_date:
                errors.append("Wedding date is required")
            if not self.venue.strip():
                errors.append("Venue is required")
            if self.wedding_date:
                try:
                    selected = date.fromisoformat(self.wedding_date)
                except ValueError:
                    errors.append("Wedding date is invalid")
                else:
                    if selected < (today or date.today()):
                        errors.append("Wedding date must be in the future")
        elif step == "confirmation":
            if self.payment_method not in PAYMENT_METHODS:
                errors.append("Please select a payment method")
            if self.payment_amount <= 0:
                errors.append("Payment amount is required")
            if self.receipt is None:
                errors.append("Please upload your payment receipt")
            if not self.agreed_to_terms:
                errors.append("You must agree to the Terms and Conditions")
            if not self.agreed_to_privacy:
                errors.append("You must agree to the Privacy Policy")
        else:
            raise ValueError(f"Unknown booking step: {step}")
        return errors

    def as_form_data(self, package_id) -> dict:
        data = {
            "packageId": str(package_id),
            "weddingDate": self.wedding_date,
            "venue": self.venue.strip(),
        }
        optional = {
            "weddingTime": self.wedding_time,
            "specialRequests": self.special_requests,
            "paymentMethod": self.payment_method,
            "paymentAmount": str(self.payment_amount) if self.payment_amount else "",
        }
        data.update({k: v for k, v in optional.items() if v})
        return data


def create_booking(api, session_store, package_id, draft: BookingDraft, today: Optional[date] = None) -> dict:
    require_role(session_store, "client")
    errors = draft.validate_step("details", today) + draft.validate_step("confirmation", today)
    if errors:
        raise ValidationError("; ".join(errors), errors)

    files = {"receiptFile": draft.receipt} if draft.receipt else None
    result = api.post("/bookings/my-bookings", data=draft.as_form_data(package_id), files=files)
    log.info(f"✅ Booking created for package {package_id}: {result.get('bookingId')}")
    return result
