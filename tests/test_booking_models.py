import pytest

from use_cases.booking_models import (
    Booking,
    BookingCategories,
    BookingFilters,
    BookingStatus,
    Payment,
    PaymentStatus,
    StatusCounts,
    booking_status_style,
    can_transition,
    categorize,
    parse_booking_status,
    payment_status_label,
)


def _booking(booking_id, status, **extra):
    data = {"booking_id": booking_id, "status": status, "package_title": f"Package {booking_id}", "package_price": "45000"}
    data.update(extra)
    return data


@pytest.mark.parametrize("current,target,allowed", [
    ("pending", "confirmed", True),
    ("pending", "cancelled", True),
    ("confirmed", "completed", True),
    ("confirmed", "cancelled", True),
    ("pending", "completed", False),
    ("confirmed", "pending", False),
    ("completed", "cancelled", False),
    ("cancelled", "confirmed", False),
])
def test_transition_table(current, target, allowed):
    assert can_transition(BookingStatus(current), BookingStatus(target)) is allowed


def test_unknown_status_does_not_raise():
    booking = Booking.from_api(_booking(1, "on_hold"))
    assert booking.status is None
    assert booking.raw_status == "on_hold"
    assert parse_booking_status("on_hold") is None
    assert booking_status_style("on_hold")["label"] == "Unknown"
    assert booking_status_style(BookingStatus.CONFIRMED)["label"] == "Confirmed"


def test_payment_labels():
    assert payment_status_label(None) == "No Payment"
    assert payment_status_label(Payment.from_api({"payment_id": 1, "amount": 10, "status": "verified"})) == "Verified"
    odd = Payment.from_api({"payment_id": 2, "amount": 10, "status": "refunded"})
    assert odd.status is None
    assert payment_status_label(odd) == "Unknown"


def test_booking_parses_payment_and_names():
    booking = Booking.from_api(_booking(
        5, "confirmed",
        planner_first_name="Ria", planner_last_name="Lim",
        payment={"payment_id": 9, "amount": "15000.50", "status": "pending"},
    ))
    assert booking.package_price == 45000.0
    assert booking.planner_name == "Ria Lim"
    assert booking.payment.amount == 15000.5
    assert booking.payment.status == PaymentStatus.PENDING


def test_categorize_upcoming_is_pending_and_confirmed():
    bookings = [Booking.from_api(_booking(i, s)) for i, s in enumerate(
        ["pending", "confirmed", "completed", "cancelled", "pending"])]
    grouped = categorize(bookings)
    assert {b.status for b in grouped.upcoming} == {BookingStatus.PENDING, BookingStatus.CONFIRMED}
    assert len(grouped.upcoming) == 3
    assert len(grouped.completed) == 1
    assert len(grouped.cancelled) == 1
    assert len(grouped) == 5


def test_categories_from_api_fix_misfiled_bookings():
    grouped = BookingCategories.from_api({
        "upcoming": [_booking(1, "pending"), _booking(2, "completed")],
        "completed": [],
        "cancelled": [_booking(3, "cancelled"), _booking(4, "mystery")],
    })
    assert [b.booking_id for b in grouped.upcoming] == [1]
    assert [b.booking_id for b in grouped.completed] == [2]
    # unknown statuses stay in the bucket the backend reported
    assert [b.booking_id for b in grouped.cancelled] == [3, 4]


def test_filters_to_params():
    filters = BookingFilters(status=BookingStatus.PENDING, search="  garden  ", page=2, limit=10)
    assert filters.to_params() == {"status": "pending", "search": "garden", "page": 2, "limit": 10}
    assert BookingFilters(search="   ").to_params() == {}


def test_status_counts_default_and_total():
    counts = StatusCounts.from_api(None)
    assert counts.as_dict() == {"pending": 0, "confirmed": 0, "completed": 0, "cancelled": 0}
    assert StatusCounts.from_api({"pending": "3", "confirmed": 2, "completed": 1, "cancelled": 1}).total == 7
