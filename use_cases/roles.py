"""Role capability table: one lookup for everything that varies by role."""

from dataclasses import dataclass
from typing import Optional, Tuple

HOME_PATH = "/"
LOGIN_PATH = "/login"
ADMIN_DASHBOARD_PATH = "/bplo/dashboard"


@dataclass(frozen=True)
class NavItemSpec:
    name: str
    icon: str
    path: str
    requires_approval: bool = False


@dataclass(frozen=True)
class RoleCapability:
    label: str
    icon: str
    color: str
    dashboard_path: str
    nav_items: Tuple[NavItemSpec, ...]


ROLE_CAPABILITIES = {
    "client": RoleCapability(
        label="Client",
        icon="💍",
        color="blue",
        dashboard_path="/client/dashboard",
        nav_items=(
            NavItemSpec("Dashboard", "🏠", "/client/dashboard"),
            NavItemSpec("Bookings", "📅", "/client/bookings"),
            NavItemSpec("Profile", "👤", "/client/profile"),
            NavItemSpec("Payments", "💳", "/client/payments"),
        ),
    ),
    "planner": RoleCapability(
        label="Planner",
        icon="📋",
        color="green",
        dashboard_path="/planner/dashboard",
        nav_items=(
            NavItemSpec("Dashboard", "🏠", "/planner/dashboard", requires_approval=True),
            NavItemSpec("Services", "📦", "/planner/services", requires_approval=True),
            NavItemSpec("Bookings", "🗂", "/planner/bookings", requires_approval=True),
            NavItemSpec("Clients", "👥", "/planner/clients", requires_approval=True),
            NavItemSpec("Reports", "📊", "/planner/reports", requires_approval=True),
            NavItemSpec("Profile", "👤", "/planner/profile"),
        ),
    ),
    "admin": RoleCapability(
        label="BPLO Admin",
        icon="🛡",
        color="violet",
        dashboard_path=ADMIN_DASHBOARD_PATH,
        nav_items=(
            NavItemSpec("Dashboard", "🏠", ADMIN_DASHBOARD_PATH),
            NavItemSpec("Planners", "✅", "/admin/planners"),
            NavItemSpec("Reports", "📄", "/admin/reports"),
            NavItemSpec("Settings", "⚙️", "/admin/settings"),
        ),
    ),
}

DEFAULT_ICON = "👤"
DEFAULT_COLOR = "gray"


def get_capability(role: Optional[str]) -> Optional[RoleCapability]:
    return ROLE_CAPABILITIES.get(role) if role else None


def dashboard_path_for_role(role: Optional[str]) -> str:
    # Unknown roles land on the admin dashboard, same as the access-denied screen.
    capability = get_capability(role)
    return capability.dashboard_path if capability else ADMIN_DASHBOARD_PATH


def role_color(role: Optional[str]) -> str:
    capability = get_capability(role)
    return capability.color if capability else DEFAULT_COLOR


def role_icon(role: Optional[str]) -> str:
    capability = get_capability(role)
    return capability.icon if capability else DEFAULT_ICON


def role_label(role: Optional[str]) -> str:
    capability = get_capability(role)
    return capability.label if capability else (role or "Guest").capitalize()
