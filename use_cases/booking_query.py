"""Client booking queries with filter handling and stable status counts."""

import logging
import threading
from dataclasses import replace
from typing import Any, Dict, List, Optional

from use_cases.booking_models import (
    Booking,
    BookingCategories,
    BookingFilters,
    BookingStatus,
    BookingSummary,
    Pagination,
    StatusCounts,
    parse_booking_status,
)
from use_cases.errors import AccessDenied, ClientError, ValidationError

log = logging.getLogger(__name__)

AUTH_REQUIRED_MESSAGE = "Authentication required"
DEFAULT_CLEARED_FILTERS = BookingFilters(page=1, limit=50)


def error_message(exc: Exception, fallback: str) -> str:
    if isinstance(exc, ClientError):
        return getattr(exc, "message", None) or fallback
    return "Invalid response received from server"


class ClientBookingsQuery:
    """
    Fetches the logged-in client's bookings.

    Three views come from each response: ``bookings`` (grouped by category),
    ``summary`` (sized by the current filters) and ``status_counts`` (the
    backend's unfiltered per-status aggregate used for tab badges). Tab
    badges are never derived from the displayed list.

    Only the most recently issued fetch may update the state; older
    responses that arrive late are dropped.
    """

    def __init__(self, api, session_store, initial_filters: Optional[BookingFilters] = None):
        self.api = api
        self.session_store = session_store
        self.bookings = BookingCategories()
        self.summary = BookingSummary()
        self.status_counts = StatusCounts()
        self.pagination: Optional[Pagination] = None
        self.loading = False
        self.error: Optional[str] = None
        self.filters = initial_filters or BookingFilters()
        self._requested = self.filters
        self._generation = 0
        self._lock = threading.Lock()

    def _is_client(self) -> bool:
        store = self.session_store
        return bool(store.is_authenticated and store.user is not None and store.user.role == "client")

    def _begin(self, filters: BookingFilters) -> int:
        with self._lock:
            self._generation += 1
            self._requested = filters
            self.loading = True
            self.error = None
            return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def fetch(self, filters: Optional[BookingFilters] = None) -> bool:
        if not self._is_client():
            self.error = AUTH_REQUIRED_MESSAGE
            return False

        current_filters = filters if filters is not None else self.filters
        generation = self._begin(current_filters)
        try:
            data = self.api.get("/bookings/my-bookings", params=current_filters.to_params())
            bookings = BookingCategories.from_api(data.get("bookings"))
            summary = BookingSummary.from_api(data.get("summary"))
            status_counts = StatusCounts.from_api(data.get("statusCounts"))
            pagination = Pagination.from_api(data.get("pagination"))
        except (ClientError, AttributeError, TypeError, ValueError) as e:
            with self._lock:
                if self._is_current(generation):
                    self.error = error_message(e, "Failed to fetch bookings")
            log.error(f"❌ Failed to fetch bookings: {e}")
            return False
        finally:
            with self._lock:
                if self._is_current(generation):
                    self.loading = False

        with self._lock:
            if not self._is_current(generation):
                log.debug(f"Dropping superseded bookings response (generation {generation})")
                return False
            self.bookings = bookings
            self.summary = summary
            self.status_counts = status_counts
            self.pagination = pagination
            self.filters = current_filters
        return True

    # --- filter actions ---

    def update_filters(self, **changes: Any) -> bool:
        if "status" in changes and changes["status"] is not None:
            status = parse_booking_status(changes["status"])
            if status is None:
                raise ValidationError(f"Unknown booking status: {changes['status']}")
            changes["status"] = status
        return self.fetch(replace(self.filters, **changes))

    def search(self, term: str) -> bool:
        return self.update_filters(search=term, page=1)

    def filter_by_status(self, status: Optional[BookingStatus]) -> bool:
        return self.update_filters(status=status, page=1)

    def change_page(self, page: int) -> bool:
        return self.update_filters(page=page)

    def clear_filters(self) -> bool:
        return self.fetch(DEFAULT_CLEARED_FILTERS)

    def refetch(self) -> bool:
        return self.fetch()

    def retry(self) -> bool:
        """Re-issue the last requested filters, including ones whose fetch failed."""
        return self.fetch(self._requested)

    def tab_counts(self) -> Dict[str, int]:
        counts = self.status_counts
        return {
            "all": counts.total,
            "pending": counts.pending,
            "confirmed": counts.confirmed,
            "completed": counts.completed,
            "cancelled": counts.cancelled,
        }


class SearchDebouncer:
    """Holds back free-text search until typing pauses for ``delay_ms``."""

    def __init__(self, delay_ms: int = 500):
        self.delay = delay_ms / 1000.0
        self._pending: Optional[str] = None
        self._last_input = 0.0
        self.applied: Optional[str] = None

    def submit(self, term: str, now: float) -> None:
        if term == self._pending or (self._pending is None and term == self.applied):
            return
        self._pending = term
        self._last_input = now

    def remaining(self, now: float) -> float:
        if self._pending is None:
            return 0.0
        return max(0.0, self.delay - (now - self._last_input))

    def due(self, now: float) -> Optional[str]:
        """Release the pending term once the pause has elapsed; call mark_applied after it succeeds."""
        if self._pending is None or now - self._last_input < self.delay:
            return None
        term, self._pending = self._pending, None
        if term == self.applied:
            return None
        return term

    def mark_applied(self, term: str) -> None:
        self.applied = term


PLANNER_REQUIRED_MESSAGE = "Select a planner to view their bookings"


class PlannerBookingsQuery:
    """
    Flat booking list for a planner, or for an admin looking at one planner.
    Planners always see their own bookings; admins must set ``planner_id``.
    """

    def __init__(self, api, session_store, planner_id: Optional[int] = None):
        self.api = api
        self.session_store = session_store
        self.planner_id = planner_id
        self.bookings: List[Booking] = []
        self.loading = False
        self.error: Optional[str] = None

    def fetch(self) -> bool:
        store = self.session_store
        user = store.user if store.is_authenticated else None
        if user is None or user.role not in ("planner", "admin"):
            self.error = AUTH_REQUIRED_MESSAGE
            return False

        if user.role == "planner":
            planner_id = user.user_id
        elif self.planner_id is None:
            self.error = PLANNER_REQUIRED_MESSAGE
            return False
        else:
            planner_id = self.planner_id

        self.loading = True
        self.error = None
        try:
            data = self.api.get(f"/bookings/planner/{planner_id}")
            self.bookings = [Booking.from_api(item) for item in data.get("bookings") or []]
        except (ClientError, AttributeError, TypeError, ValueError) as e:
            self.error = error_message(e, "Failed to fetch planner bookings")
            log.error(f"❌ Failed to fetch planner bookings for {planner_id}: {e}")
            return False
        finally:
            self.loading = False
        return True

    refetch = fetch

    def select_planner(self, planner_id: int) -> bool:
        if planner_id != self.planner_id:
            self.planner_id = planner_id
            self.bookings = []
        return self.fetch()


def fetch_booking_details(api, session_store, booking_id) -> Booking:
    user = session_store.user if session_store.is_authenticated else None
    if user is None or user.role != "client":
        raise AccessDenied(AUTH_REQUIRED_MESSAGE)
    return Booking.from_api(api.get(f"/bookings/my-bookings/{booking_id}"))
