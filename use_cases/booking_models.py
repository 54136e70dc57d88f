"""Booking and payment DTOs with closed status enums."""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

UPCOMING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


def parse_booking_status(value: Any) -> Optional[BookingStatus]:
    try:
        return BookingStatus(value)
    except ValueError:
        return None


def parse_payment_status(value: Any) -> Optional[PaymentStatus]:
    try:
        return PaymentStatus(value)
    except ValueError:
        return None


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Payment:
    payment_id: int
    amount: float
    status: Optional[PaymentStatus]
    raw_status: str = ""
    receipt_url: Optional[str] = None
    uploaded_at: Optional[str] = None
    verified_at: Optional[str] = None
    verified_by: Optional[int] = None
    booking_id: Optional[int] = None
    package_title: Optional[str] = None
    business_name: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Payment":
        raw_status = str(data.get("status") or "")
        return cls(
            payment_id=data.get("payment_id"),
            amount=_float(data.get("amount")),
            status=parse_payment_status(raw_status),
            raw_status=raw_status,
            receipt_url=data.get("receipt_url"),
            uploaded_at=data.get("uploaded_at"),
            verified_at=data.get("verified_at"),
            verified_by=data.get("verified_by"),
            booking_id=data.get("booking_id"),
            package_title=data.get("package_title"),
            business_name=data.get("business_name"),
        )


@dataclass(frozen=True)
class Booking:
    booking_id: int
    status: Optional[BookingStatus]
    raw_status: str = ""
    package_id: Optional[int] = None
    wedding_date: Optional[str] = None
    wedding_time: Optional[str] = None
    wedding_location: Optional[str] = None
    special_requests: Optional[str] = None
    package_title: str = ""
    package_price: float = 0.0
    planner_name: str = ""
    business_name: str = ""
    client_name: str = ""
    client_email: Optional[str] = None
    created_at: Optional[str] = None
    payment: Optional[Payment] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Booking":
        raw_status = str(data.get("status") or "")
        payment = data.get("payment")
        return cls(
            booking_id=data.get("booking_id"),
            status=parse_booking_status(raw_status),
            raw_status=raw_status,
            package_id=data.get("package_id"),
            wedding_date=data.get("wedding_date"),
            wedding_time=data.get("wedding_time"),
            wedding_location=data.get("wedding_location"),
            special_requests=data.get("special_requests"),
            package_title=data.get("package_title") or "",
            package_price=_float(data.get("package_price")),
            planner_name=f"{data.get('planner_first_name') or ''} {data.get('planner_last_name') or ''}".strip(),
            business_name=data.get("business_name") or "",
            client_name=f"{data.get('client_first_name') or ''} {data.get('client_last_name') or ''}".strip(),
            client_email=data.get("client_email"),
            created_at=data.get("created_at"),
            payment=Payment.from_api(payment) if payment else None,
        )


@dataclass(frozen=True)
class BookingFilters:
    status: Optional[BookingStatus] = None
    search: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if self.status is not None:
            params["status"] = BookingStatus(self.status).value
        if self.search and self.search.strip():
            params["search"] = self.search.strip()
        if self.page:
            params["page"] = self.page
        if self.limit:
            params["limit"] = self.limit
        return params


@dataclass(frozen=True)
class StatusCounts:
    pending: int = 0
    confirmed: int = 0
    completed: int = 0
    cancelled: int = 0

    @classmethod
    def from_api(cls, data: Optional[Mapping[str, Any]]) -> "StatusCounts":
        data = data or {}
        return cls(**{name: _int(data.get(name)) for name in ("pending", "confirmed", "completed", "cancelled")})

    @property
    def total(self) -> int:
        return self.pending + self.confirmed + self.completed + self.cancelled

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class BookingSummary:
    upcoming: int = 0
    completed: int = 0
    cancelled: int = 0

    @classmethod
    def from_api(cls, data: Optional[Mapping[str, Any]]) -> "BookingSummary":
        data = data or {}
        return cls(
            upcoming=_int(data.get("upcoming")),
            completed=_int(data.get("completed")),
            cancelled=_int(data.get("cancelled")),
        )


@dataclass(frozen=True)
class BookingCategories:
    upcoming: List[Booking] = field(default_factory=list)
    completed: List[Booking] = field(default_factory=list)
    cancelled: List[Booking] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Optional[Mapping[str, Any]]) -> "BookingCategories":
        data = data or {}
        buckets = {"upcoming": [], "completed": [], "cancelled": []}
        for key in buckets:
            for item in data.get(key) or []:
                booking = Booking.from_api(item)
                buckets[category_for(booking.status) or key].append(booking)
        return cls(**buckets)

    def all(self) -> List[Booking]:
        return self.upcoming + self.completed + self.cancelled

    def __len__(self) -> int:
        return len(self.upcoming) + len(self.completed) + len(self.cancelled)


@dataclass(frozen=True)
class Pagination:
    current_page: int = 1
    total_items: int = 0
    items_per_page: int = 0
    has_next: bool = False
    has_prev: bool = False

    @classmethod
    def from_api(cls, data: Optional[Mapping[str, Any]]) -> Optional["Pagination"]:
        if not data:
            return None
        return cls(
            current_page=_int(data.get("currentPage"), 1),
            total_items=_int(data.get("totalItems")),
            items_per_page=_int(data.get("itemsPerPage")),
            has_next=bool(data.get("hasNext")),
            has_prev=bool(data.get("hasPrev")),
        )


def category_for(status: Optional[BookingStatus]) -> Optional[str]:
    if status in UPCOMING_STATUSES:
        return "upcoming"
    if status == BookingStatus.COMPLETED:
        return "completed"
    if status == BookingStatus.CANCELLED:
        return "cancelled"
    return None


def categorize(bookings: List[Booking]) -> BookingCategories:
    """
    Group bookings by their own status: upcoming = pending + confirmed.
    Unrecognized statuses are kept under upcoming so they stay visible.
    """
    buckets = {"upcoming": [], "completed": [], "cancelled": []}
    for booking in bookings:
        buckets[category_for(booking.status) or "upcoming"].append(booking)
    return BookingCategories(**buckets)


NEUTRAL_STYLE = {"label": "Unknown", "color": "gray", "icon": "❔"}

BOOKING_STATUS_STYLES = {
    BookingStatus.PENDING: {"label": "Pending", "color": "orange", "icon": "⏳"},
    BookingStatus.CONFIRMED: {"label": "Confirmed", "color": "green", "icon": "✅"},
    BookingStatus.COMPLETED: {"label": "Completed", "color": "blue", "icon": "🎉"},
    BookingStatus.CANCELLED: {"label": "Cancelled", "color": "red", "icon": "✖️"},
}


def booking_status_style(status: Any) -> Dict[str, str]:
    parsed = status if isinstance(status, BookingStatus) else parse_booking_status(status)
    if parsed is None:
        return dict(NEUTRAL_STYLE)
    return dict(BOOKING_STATUS_STYLES[parsed])


def payment_status_label(payment: Optional[Payment]) -> str:
    if payment is None:
        return "No Payment"
    if payment.status == PaymentStatus.PENDING:
        return "Pending Verification"
    if payment.status == PaymentStatus.VERIFIED:
        return "Verified"
    if payment.status == PaymentStatus.REJECTED:
        return "Rejected"
    return "Unknown"
