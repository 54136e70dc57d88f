"""Sidebar entries per role. Disabled entries are advisory UI only."""

from dataclasses import dataclass
from typing import List, Optional

from use_cases.roles import get_capability
from use_cases.session_models import UserSession, planner_status

LOCK_ICON = "🔒"


@dataclass(frozen=True)
class SidebarItem:
    name: str
    icon: str
    path: str
    disabled: bool = False
    requires_approval: bool = False
    badge: Optional[str] = None
    is_logout: bool = False


LOGOUT_ITEM = SidebarItem("Logout", "🚪", "", is_logout=True)


def _status_indicator(status: str) -> SidebarItem:
    if status == "pending":
        return SidebarItem("Approval Pending", "⏳", "/planner/profile", badge="Review")
    return SidebarItem("Account Rejected", "⚠️", "/planner/profile", badge="Contact Support")


def build_sidebar_items(user: Optional[UserSession]) -> List[SidebarItem]:
    capability = get_capability(user.role if user else None)
    if capability is None:
        return [SidebarItem("Dashboard", "🏠", "/"), LOGOUT_ITEM]

    status = planner_status(user)
    approved = status in (None, "approved")

    items = []
    for spec in capability.nav_items:
        badge = None
        if status is not None and spec.path == "/planner/profile" and status != "approved":
            badge = status.capitalize()
        items.append(
            SidebarItem(
                name=spec.name,
                icon=spec.icon,
                path=spec.path,
                disabled=spec.requires_approval and not approved,
                requires_approval=spec.requires_approval,
                badge=badge,
            )
        )
    items.append(LOGOUT_ITEM)

    if not approved:
        items.insert(0, _status_indicator(status))
    return items
