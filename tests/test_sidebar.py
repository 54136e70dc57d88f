import pytest

from tests.factories import make_user
from use_cases.roles import ROLE_CAPABILITIES, dashboard_path_for_role, role_color, role_icon
from use_cases.sidebar import build_sidebar_items


def _by_name(items):
    return {item.name: item for item in items}


@pytest.mark.parametrize("status,indicator,badge", [
    ("pending", "Approval Pending", "Review"),
    ("rejected", "Account Rejected", "Contact Support"),
])
def test_unapproved_planner_sees_disabled_entries(status, indicator, badge):
    items = build_sidebar_items(make_user("planner", status))

    assert items[0].name == indicator
    assert items[0].badge == badge
    named = _by_name(items)
    for name in ("Dashboard", "Services", "Bookings", "Clients", "Reports"):
        assert named[name].disabled is True
        assert named[name].requires_approval is True
    assert named["Profile"].disabled is False
    assert named["Profile"].badge == status.capitalize()
    assert items[-1].is_logout is True


def test_approved_planner_sees_enabled_entries():
    items = build_sidebar_items(make_user("planner", "approved"))
    assert not any(item.disabled for item in items)
    assert items[0].name == "Dashboard"
    assert _by_name(items)["Profile"].badge is None


@pytest.mark.parametrize("role", ["client", "admin"])
def test_other_roles_never_disabled(role):
    items = build_sidebar_items(make_user(role))
    assert not any(item.disabled for item in items)
    assert [i.path for i in items[:-1]] == [spec.path for spec in ROLE_CAPABILITIES[role].nav_items]


def test_unknown_or_missing_user_gets_default_items():
    items = build_sidebar_items(None)
    assert [i.name for i in items] == ["Dashboard", "Logout"]
    assert items[0].path == "/"


def test_role_capability_lookups():
    assert dashboard_path_for_role("client") == "/client/dashboard"
    assert dashboard_path_for_role("planner") == "/planner/dashboard"
    assert dashboard_path_for_role("admin") == "/bplo/dashboard"
    assert dashboard_path_for_role("stranger") == "/bplo/dashboard"
    assert role_color("stranger") == "gray"
    assert role_icon(None) == "👤"
    assert len({cap.color for cap in ROLE_CAPABILITIES.values()}) == len(ROLE_CAPABILITIES)
