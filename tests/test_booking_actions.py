from datetime import date

import pytest

from use_cases.booking_actions import BookingDraft, cancel_booking, confirm_booking, create_booking, update_status
from use_cases.booking_models import BookingStatus
from use_cases.errors import AccessDenied, ValidationError

TODAY = date(2026, 6, 1)
RECEIPT = ("receipt.png", b"\x89PNG", "image/png")


def _complete_draft(**overrides):
    draft = BookingDraft(
        wedding_date="2026-12-12",
        wedding_time="15:00",
        venue="  Manila Cathedral ",
        payment_method="gcash",
        payment_amount=15000.0,
        receipt=RECEIPT,
        agreed_to_terms=True,
        agreed_to_privacy=True,
    )
    for key, value in overrides.items():
        setattr(draft, key, value)
    return draft


def test_cancel_booking_sends_reason(api, make_store):
    api.put.return_value = {"message": "Booking cancelled"}
    cancel_booking(api, make_store(role="client"), 12, reason=" Change of plans ")
    api.put.assert_called_once_with("/bookings/my-bookings/12/cancel", json={"reason": "Change of plans"})


def test_cancel_booking_reason_optional_unless_required(api, make_store):
    store = make_store(role="client")
    cancel_booking(api, store, 12)
    api.put.assert_called_once_with("/bookings/my-bookings/12/cancel", json={"reason": None})

    api.put.reset_mock()
    with pytest.raises(ValidationError):
        cancel_booking(api, store, 12, reason="   ", require_reason=True)
    api.put.assert_not_called()


@pytest.mark.parametrize("role,message", [(None, "Authentication required"), ("planner", "Insufficient permissions")])
def test_cancel_booking_client_only(api, make_store, role, message):
    with pytest.raises(AccessDenied, match=message):
        cancel_booking(api, make_store(role=role), 12)
    api.put.assert_not_called()


def test_update_status_follows_transition_table(api, make_store):
    store = make_store(role="planner")
    update_status(api, store, 3, "completed", notes="All done", current_status="confirmed")
    api.put.assert_called_once_with("/bookings/3/status", json={"status": "completed", "notes": "All done"})


@pytest.mark.parametrize("current,target", [("pending", "completed"), ("cancelled", "confirmed"), ("completed", "cancelled")])
def test_update_status_rejects_illegal_transition(api, make_store, current, target):
    with pytest.raises(ValidationError):
        update_status(api, make_store(role="admin"), 3, target, current_status=current)
    api.put.assert_not_called()


def test_update_status_rejects_unknown_target(api, make_store):
    with pytest.raises(ValidationError, match="Unknown booking status"):
        update_status(api, make_store(role="planner"), 3, "archived")


def test_update_status_not_for_clients(api, make_store):
    with pytest.raises(AccessDenied):
        update_status(api, make_store(role="client"), 3, BookingStatus.CONFIRMED)


def test_confirm_booking(api, make_store):
    confirm_booking(api, make_store(role="planner"), 8, current_status="pending")
    api.put.assert_called_once_with("/bookings/8/status", json={"status": "confirmed", "notes": None})


def test_draft_details_step():
    assert _complete_draft().validate_step("details", TODAY) == []

    errors = BookingDraft().validate_step("details", TODAY)
    assert "Wedding date is required" in errors
    assert "Venue is required" in errors

    past = _complete_draft(wedding_date="2026-01-01").validate_step("details", TODAY)
    assert past == ["Wedding date must be in the future"]

    assert _complete_draft(wedding_date="12/12/2026").validate_step("details", TODAY) == ["Wedding date is invalid"]


def test_draft_confirmation_step():
    errors = BookingDraft().validate_step("confirmation", TODAY)
    assert errors == [
        "Please select a payment method",
        "Payment amount is required",
        "Please upload your payment receipt",
        "You must agree to the Terms and Conditions",
        "You must agree to the Privacy Policy",
    ]


def test_draft_unknown_step():
    with pytest.raises(ValueError):
        BookingDraft().validate_step("review")


def test_create_booking_posts_multipart(api, make_store):
    api.post.return_value = {"bookingId": 55}
    result = create_booking(api, make_store(role="client"), 4, _complete_draft(), today=TODAY)

    assert result == {"bookingId": 55}
    api.post.assert_called_once_with(
        "/bookings/my-bookings",
        data={
            "packageId": "4",
            "weddingDate": "2026-12-12",
            "venue": "Manila Cathedral",
            "weddingTime": "15:00",
            "paymentMethod": "gcash",
            "paymentAmount": "15000.0",
        },
        files={"receiptFile": RECEIPT},
    )


def test_create_booking_collects_all_errors(api, make_store):
    with pytest.raises(ValidationError) as exc:
        create_booking(api, make_store(role="client"), 4, _complete_draft(venue="", agreed_to_terms=False), today=TODAY)
    assert exc.value.errors == ("Venue is required", "You must agree to the Terms and Conditions")
    api.post.assert_not_called()
