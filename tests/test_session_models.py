import pytest

from use_cases.errors import AuthError
from use_cases.session_models import (
    apply_profile_changes,
    full_name,
    initials,
    is_admin,
    is_planner_approved,
    logout_redirect_path_for_role,
    normalize_user_payload,
    planner_status,
)


def _payload(**overrides):
    data = {"user_id": 3, "first_name": "ana", "last_name": "reyes", "email": "ana@example.com", "role": "client"}
    data.update(overrides)
    return data


def test_planner_without_profile_defaults_to_pending():
    user = normalize_user_payload(_payload(role="planner"))
    assert user.planner_profile is not None
    assert user.planner_profile.status == "pending"
    assert user.planner_profile.business_name == ""
    assert is_planner_approved(user) is False


def test_planner_profile_without_status_defaults_to_pending():
    user = normalize_user_payload(_payload(role="planner", plannerProfile={"business_name": "Bloom"}))
    assert user.planner_profile.business_name == "Bloom"
    assert user.planner_profile.status == "pending"


def test_nested_user_key_is_accepted():
    user = normalize_user_payload({"user": _payload(role="planner", plannerProfile={"status": "approved"})})
    assert user.user_id == 3
    assert is_planner_approved(user) is True


@pytest.mark.parametrize("missing", ["user_id", "email", "role"])
def test_incomplete_identity_raises_auth_error(missing):
    data = _payload()
    del data[missing]
    with pytest.raises(AuthError) as exc:
        normalize_user_payload(data)
    assert exc.value.reason == "incomplete_payload"


def test_unknown_role_is_incomplete():
    with pytest.raises(AuthError):
        normalize_user_payload(_payload(role="superuser"))


@pytest.mark.parametrize("body", [[{"user_id": 1}], "ok", None, 42])
def test_non_object_body_is_incomplete(body):
    with pytest.raises(AuthError) as exc:
        normalize_user_payload(body)
    assert exc.value.reason == "incomplete_payload"


@pytest.mark.parametrize("profile", ["approved", ["approved"], 5, None])
def test_malformed_planner_profile_is_treated_as_missing(profile):
    user = normalize_user_payload(_payload(role="planner", plannerProfile=profile))
    assert user.planner_profile.status == "pending"
    assert is_planner_approved(user) is False


@pytest.mark.parametrize("profile", [["x"], "2027-02-14"])
def test_malformed_client_profile_is_dropped(profile):
    user = normalize_user_payload(_payload(clientProfile=profile))
    assert user.client_profile is None
    assert user.role == "client"


def test_approval_status_only_for_planners():
    client = normalize_user_payload(_payload(plannerProfile={"status": "approved"}, clientProfile={"wedding_date": "2027-02-14"}))
    assert client.planner_profile is None
    assert client.client_profile.wedding_date == "2027-02-14"
    assert planner_status(client) is None
    assert is_planner_approved(client) is False


def test_name_helpers():
    user = normalize_user_payload(_payload(last_name=""))
    assert full_name(user) == "ana"
    assert initials(user) == "A"
    assert full_name(None) == ""
    assert initials(None) == ""
    assert initials(normalize_user_payload(_payload())) == "AR"


def test_is_admin():
    assert is_admin(normalize_user_payload(_payload(role="admin"))) is True
    assert is_admin(normalize_user_payload(_payload())) is False
    assert is_admin(None) is False


def test_logout_redirect_mapping():
    assert logout_redirect_path_for_role("client") == "/"
    assert logout_redirect_path_for_role("planner") == "/login"
    assert logout_redirect_path_for_role("admin") == "/login"
    assert logout_redirect_path_for_role(None) == "/"


def test_profile_changes_cannot_touch_role():
    user = normalize_user_payload(_payload())
    updated = apply_profile_changes(user, {"first_name": "Ann", "role": "admin"})
    assert updated.first_name == "Ann"
    assert updated.role == "client"
