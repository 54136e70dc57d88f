"""Application layer contracts for session, access and booking flows."""

from .booking_models import BookingFilters, BookingStatus, PaymentStatus, StatusCounts
from .booking_query import ClientBookingsQuery, PlannerBookingsQuery, SearchDebouncer
from .errors import AccessDenied, AuthError, NetworkError, NetworkTimeout, ValidationError
from .rbac_policy import AccessDecision, AccessStatus, evaluate_access
from .session_models import PlannerStatus, Role, UserSession, is_admin, is_planner_approved
from .session_store import SessionStore

__all__ = [
    "AccessDecision",
    "AccessDenied",
    "AccessStatus",
    "AuthError",
    "BookingFilters",
    "BookingStatus",
    "ClientBookingsQuery",
    "NetworkError",
    "NetworkTimeout",
    "PaymentStatus",
    "PlannerBookingsQuery",
    "PlannerStatus",
    "Role",
    "SearchDebouncer",
    "SessionStore",
    "StatusCounts",
    "UserSession",
    "ValidationError",
    "evaluate_access",
    "is_admin",
    "is_planner_approved",
]
