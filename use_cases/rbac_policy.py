"""Centralized Role-Based Access Control logic."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from use_cases.errors import AccessDenied
from use_cases.roles import HOME_PATH, dashboard_path_for_role
from use_cases.routes import RouteRule
from use_cases.session_models import planner_status

log = logging.getLogger(__name__)


class AccessStatus(str, Enum):
    DEFER = "DEFER"
    GRANT = "GRANT"
    REDIRECT_LOGIN = "REDIRECT_LOGIN"
    DENIED = "DENIED"
    LOCKED = "LOCKED"


@dataclass(frozen=True)
class AccessDecision:
    status: AccessStatus
    redirect_to: Optional[str] = None
    return_to: Optional[str] = None
    own_dashboard: Optional[str] = None
    home: str = HOME_PATH
    role: Optional[str] = None
    planner_status: Optional[str] = None
    reason: str = ""

    @property
    def granted(self) -> bool:
        return self.status == AccessStatus.GRANT


def has_role_access(role: Optional[str], rule: RouteRule) -> bool:
    """Exact match on required_role OR membership in allowed_roles; no rule means no restriction."""
    if rule.required_role is None and not rule.allowed_roles:
        return True
    if rule.required_role is not None and role == rule.required_role:
        return True
    return bool(rule.allowed_roles) and role in rule.allowed_roles


def evaluate_access(store, rule: RouteRule, location: Optional[str] = None) -> AccessDecision:
    """
    Decide whether the current session may enter a screen.
    Order: loading -> authentication -> role -> planner approval -> grant.
    """
    if store.is_loading:
        return AccessDecision(AccessStatus.DEFER, reason="session_loading")

    user = store.user if store.is_authenticated else None
    if user is None:
        if not rule.requires_auth:
            return AccessDecision(AccessStatus.GRANT, reason="public")
        return AccessDecision(
            AccessStatus.REDIRECT_LOGIN,
            redirect_to=HOME_PATH,
            return_to=location or rule.path,
            reason="auth_required",
        )

    if not has_role_access(user.role, rule):
        log.warning(f"⛔ Access denied: role={user.role} path={rule.path} reason=insufficient_role")
        return AccessDecision(
            AccessStatus.DENIED,
            own_dashboard=dashboard_path_for_role(user.role),
            role=user.role,
            reason="insufficient_role",
        )

    status = planner_status(user)
    if rule.require_approved and status is not None and status != "approved":
        log.warning(f"🔒 Locked: planner {user.user_id} ({status}) tried {rule.path}")
        return AccessDecision(
            AccessStatus.LOCKED,
            redirect_to="/planner/profile",
            own_dashboard=dashboard_path_for_role(user.role),
            role=user.role,
            planner_status=status,
            reason=f"planner_{status}",
        )

    return AccessDecision(AccessStatus.GRANT, role=user.role, reason="authorized")


def enforce(store, rule: RouteRule, location: Optional[str] = None) -> AccessDecision:
    """Like evaluate_access, but raises AccessDenied for anything other than a grant."""
    decision = evaluate_access(store, rule, location)
    if not decision.granted:
        raise AccessDenied(f"Access to {rule.path} not granted ({decision.reason})", decision)
    return decision
