"""Session store: the single source of truth for who is logged in."""

import logging
from typing import Any, Callable, Mapping, MutableMapping, Optional

from use_cases.errors import AuthError, NetworkError
from use_cases.session_models import (
    PlannerStatus,
    UserSession,
    apply_profile_changes,
    full_name,
    initials,
    is_planner_approved,
    logout_redirect_path_for_role,
    normalize_user_payload,
    planner_status,
)

log = logging.getLogger(__name__)

PENDING_BOOKING_KEY = "pending_booking"


class SessionStore:
    """
    Holds the authenticated user and exposes the auth actions.

    The API client, the draft storage and the navigation callback are injected
    so the store can be created per browser session and tested in isolation.
    """

    def __init__(
        self,
        api,
        storage: Optional[MutableMapping[str, Any]] = None,
        navigate: Optional[Callable[[str], None]] = None,
    ):
        self.api = api
        self.storage = storage if storage is not None else {}
        self.navigate = navigate
        self.user: Optional[UserSession] = None
        self.is_authenticated = False
        self.is_loading = False
        self.error: Optional[str] = None
        self.error_reason: Optional[str] = None

    # --- state helpers ---

    def _set_user(self, user: UserSession) -> None:
        self.user = user
        self.is_authenticated = True
        self.error = None
        self.error_reason = None

    def _clear_user(self) -> None:
        self.user = None
        self.is_authenticated = False

    def _fail(self, message: str, reason: str) -> bool:
        self.error = message
        self.error_reason = reason
        return False

    def clear_error(self) -> None:
        self.error = None
        self.error_reason = None

    def reset(self) -> None:
        self._clear_user()
        self.is_loading = False
        self.clear_error()

    # --- actions ---

    def login(self, email: str, password: str) -> bool:
        self.is_loading = True
        self.clear_error()
        try:
            payload = self.api.post("/auth/login", json={"email": email, "password": password})
            user = normalize_user_payload(payload)
        except AuthError as e:
            log.error(f"❌ Login response rejected ({e.reason})")
            return self._fail(e.message, e.reason)
        except NetworkError as e:
            if e.status_code is None:
                return self._fail(e.message, "network")
            log.info(f"Login rejected (HTTP {e.status_code})")
            return self._fail(e.payload.get("message") or "Login failed", "invalid_credentials")
        finally:
            self.is_loading = False

        self._set_user(user)
        log.info(f"✅ Logged in user {user.user_id} as {user.role}")
        return True

    def logout(self) -> str:
        """
        Notify the server, clear local state and redirect.
        The redirect target comes from the role held before clearing and is
        used even when the server call fails.
        """
        role = self.user.role if self.user else None
        redirect_path = logout_redirect_path_for_role(role)

        self.is_loading = True
        try:
            self.api.post("/auth/logout")
        except NetworkError as e:
            log.warning(f"⚠️ Server-side logout failed, clearing local session anyway: {e.message}")
        finally:
            self.storage.pop(PENDING_BOOKING_KEY, None)
            self._clear_user()
            self.is_loading = False
            self.clear_error()

        log.info(f"Logged out ({role or 'anonymous'}), redirecting to {redirect_path}")
        if self.navigate is not None:
            self.navigate(redirect_path)
        return redirect_path

    def check_auth(self) -> bool:
        """Restore the session from the server cookie; any failure clears it."""
        self.is_loading = True
        try:
            payload = self.api.get("/auth/me")
            user = normalize_user_payload(payload)
        except (AuthError, NetworkError) as e:
            log.info(f"Session restore failed: {e}")
            self._clear_user()
            return False
        finally:
            self.is_loading = False

        self._set_user(user)
        return True

    def update_profile(self, changes: Mapping[str, Any]) -> bool:
        if self.user is None:
            return False

        self.is_loading = True
        self.clear_error()
        try:
            self.api.put(f"/users/profile/{self.user.user_id}", json=dict(changes))
        except NetworkError as e:
            return self._fail(e.message or "Failed to update profile", "network" if e.status_code is None else "rejected")
        finally:
            self.is_loading = False

        self.user = apply_profile_changes(self.user, changes)
        return True

    # --- derived getters ---

    @property
    def role(self) -> Optional[str]:
        return self.user.role if self.user else None

    def full_name(self) -> str:
        return full_name(self.user)

    def initials(self) -> str:
        return initials(self.user)

    def is_planner_approved(self) -> bool:
        return is_planner_approved(self.user)

    def planner_status(self) -> Optional[PlannerStatus]:
        return planner_status(self.user)

    def logout_redirect_path(self) -> str:
        return logout_redirect_path_for_role(self.role)
