"""Static route access rules, registered once at import time."""

from dataclasses import dataclass
from typing import Optional, Tuple

from use_cases.session_models import Role


@dataclass(frozen=True)
class RouteRule:
    path: str
    name: str
    required_role: Optional[Role] = None
    allowed_roles: Optional[Tuple[Role, ...]] = None
    require_approved: bool = False
    requires_auth: bool = True
    show_in_nav: bool = True


def is_public(rule: RouteRule) -> bool:
    return rule.required_role is None and not rule.allowed_roles


PUBLIC_ROUTES = (
    RouteRule("/", "Home", requires_auth=False),
    RouteRule("/services", "Services", requires_auth=False),
    RouteRule("/about", "About", requires_auth=False),
    RouteRule("/contact", "Contact", requires_auth=False),
    RouteRule("/login", "Login", requires_auth=False, show_in_nav=False),
    RouteRule("/register", "Register", requires_auth=False, show_in_nav=False),
    RouteRule("/not-found", "Not Found", requires_auth=False, show_in_nav=False),
)

CLIENT_ROUTES = (
    RouteRule("/client/dashboard", "Dashboard", required_role="client"),
    RouteRule("/client/bookings", "My Bookings", required_role="client"),
    RouteRule("/client/profile", "Profile", required_role="client"),
    RouteRule("/client/payments", "Payments", required_role="client"),
    RouteRule("/client/messages", "Messages", required_role="client"),
    RouteRule("/client/book", "Book a Package", required_role="client", show_in_nav=False),
)

PLANNER_ROUTES = (
    RouteRule("/planner/profile", "Profile", required_role="planner"),
    RouteRule("/planner/dashboard", "Dashboard", required_role="planner", require_approved=True),
    RouteRule("/planner/services", "Services", required_role="planner", require_approved=True),
    RouteRule("/planner/bookings", "Bookings", required_role="planner", require_approved=True),
    RouteRule("/planner/clients", "Clients", required_role="planner", require_approved=True),
    RouteRule("/planner/reports", "Reports", required_role="planner", require_approved=True),
)

ADMIN_ROUTES = (
    RouteRule("/bplo/dashboard", "Dashboard", required_role="admin"),
    RouteRule("/admin/planners", "Planners", required_role="admin"),
    RouteRule("/admin/reports", "Reports", required_role="admin"),
    RouteRule("/admin/settings", "Settings", required_role="admin"),
)

SHARED_ROUTES = (
    RouteRule(
        "/bookings/manage",
        "Manage Bookings",
        allowed_roles=("planner", "admin"),
        require_approved=True,
        show_in_nav=False,
    ),
)

ALL_ROUTES = PUBLIC_ROUTES + CLIENT_ROUTES + PLANNER_ROUTES + ADMIN_ROUTES + SHARED_ROUTES

_ROUTES_BY_PATH = {rule.path: rule for rule in ALL_ROUTES}


def find_route(path: str) -> Optional[RouteRule]:
    return _ROUTES_BY_PATH.get(path)
