"""Session DTOs shared across application layers."""

from dataclasses import dataclass, replace
from typing import Any, Literal, Mapping, Optional, get_args

from use_cases.errors import AuthError

Role = Literal["client", "planner", "admin"]
PlannerStatus = Literal["pending", "approved", "rejected"]

ROLES = get_args(Role)
PLANNER_STATUSES = get_args(PlannerStatus)

INCOMPLETE_PAYLOAD_MESSAGE = "Incomplete user data received from server"


@dataclass(frozen=True)
class PlannerProfile:
    business_name: str = ""
    business_address: Optional[str] = None
    business_email: Optional[str] = None
    business_phone: Optional[str] = None
    experience_years: int = 0
    status: PlannerStatus = "pending"


@dataclass(frozen=True)
class ClientProfile:
    wedding_date: Optional[str] = None
    wedding_location: Optional[str] = None


@dataclass(frozen=True)
class UserSession:
    user_id: int
    first_name: str
    last_name: str
    email: str
    role: Role
    phone: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    profile_picture: Optional[str] = None
    created_at: Optional[str] = None
    planner_profile: Optional[PlannerProfile] = None
    client_profile: Optional[ClientProfile] = None


def is_admin(user: Optional[UserSession]) -> bool:
    return user is not None and user.role == "admin"


def planner_status(user: Optional[UserSession]) -> Optional[PlannerStatus]:
    if user is None or user.role != "planner":
        return None
    if user.planner_profile is None:
        return "pending"
    return user.planner_profile.status


def is_planner_approved(user: Optional[UserSession]) -> bool:
    return planner_status(user) == "approved"


def full_name(user: Optional[UserSession]) -> str:
    if user is None:
        return ""
    return f"{user.first_name or ''} {user.last_name or ''}".strip()


def initials(user: Optional[UserSession]) -> str:
    if user is None:
        return ""
    first = (user.first_name or "")[:1].upper()
    last = (user.last_name or "")[:1].upper()
    return first + last


def logout_redirect_path_for_role(role: Optional[str]) -> str:
    if role in ("planner", "admin"):
        return "/login"
    return "/"


def _planner_profile(raw: Any) -> PlannerProfile:
    if not isinstance(raw, Mapping) or not raw:
        return PlannerProfile()
    status = raw.get("status")
    return PlannerProfile(
        business_name=raw.get("business_name") or "",
        business_address=raw.get("business_address"),
        business_email=raw.get("business_email"),
        business_phone=raw.get("business_phone"),
        experience_years=raw.get("experience_years") or 0,
        status=status if status in PLANNER_STATUSES else "pending",
    )


def normalize_user_payload(payload: Any) -> UserSession:
    """
    Build a UserSession from a /auth/login or /auth/me body.
    Accepts both {"user": {...}} and the bare user object. Raises AuthError
    with reason "incomplete_payload" when the body is not an object or the
    identity fields are missing. Profile sub-objects of the wrong shape are
    treated as absent.
    """
    if not isinstance(payload, Mapping):
        raise AuthError(INCOMPLETE_PAYLOAD_MESSAGE, reason="incomplete_payload")
    data = payload.get("user") if isinstance(payload.get("user"), Mapping) else payload

    user_id = data.get("user_id")
    email = data.get("email")
    role = data.get("role")
    if user_id in (None, "") or not email or role not in ROLES:
        raise AuthError(INCOMPLETE_PAYLOAD_MESSAGE, reason="incomplete_payload")

    planner_profile = None
    client_profile = None
    if role == "planner":
        planner_profile = _planner_profile(data.get("plannerProfile"))
    elif role == "client" and isinstance(data.get("clientProfile"), Mapping) and data["clientProfile"]:
        raw_client = data["clientProfile"]
        client_profile = ClientProfile(
            wedding_date=raw_client.get("wedding_date"),
            wedding_location=raw_client.get("wedding_location"),
        )

    return UserSession(
        user_id=user_id,
        first_name=data.get("first_name") or "",
        last_name=data.get("last_name") or "",
        email=email,
        role=role,
        phone=data.get("phone"),
        bio=data.get("bio"),
        location=data.get("location"),
        profile_picture=data.get("profile_picture"),
        created_at=data.get("created_at"),
        planner_profile=planner_profile,
        client_profile=client_profile,
    )


PROFILE_FIELDS = ("first_name", "last_name", "phone", "bio", "location", "profile_picture")


def apply_profile_changes(user: UserSession, changes: Mapping[str, Any]) -> UserSession:
    """Merge editable profile fields into a session; identity and role stay untouched."""
    updates = {k: v for k, v in changes.items() if k in PROFILE_FIELDS}
    return replace(user, **updates)
