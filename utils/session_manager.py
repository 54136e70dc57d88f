import logging

import streamlit as st

from infrastructure.api.http_client import ApiClient
from infrastructure.config import Settings
from use_cases.session_store import PENDING_BOOKING_KEY, SessionStore

log = logging.getLogger(__name__)

"""
SESSION STATE CONTRACT

This file owns the Streamlit session state of one browser session.

st.session_state keys:

settings: Settings | None
    resolved configuration
    default: None
    owner: bootstrap

api_client: ApiClient | None
    REST client; its requests.Session carries the backend auth cookie
    default: None
    owner: session_manager

session_store: SessionStore | None
    who is logged in; created once, torn down on logout
    default: None
    owner: session_manager

auth_checked: bool
    session restore (GET /auth/me) already attempted
    default: False
    owner: auth_flow

current_path: str
    route currently rendered by app.py
    default: "/"
    owner: session_manager

return_to: str | None
    protected route requested before login
    default: None
    owner: app

pending_booking: BookingDraft | None
    booking form draft, cleared on logout
    default: None
    owner: booking views

bookings_query / search_debouncer / booking_step / payments_query / planner_bookings_query /
manage_bookings_query / manage_planner_picker / admin_planners_query
    per-screen query state, one key per screen
    default: None
    owner: views
"""

SCREEN_STATE_KEYS = (
    "bookings_query",
    "search_debouncer",
    "booking_step",
    "payments_query",
    "planner_bookings_query",
    "manage_bookings_query",
    "manage_planner_picker",
    "admin_planners_query",
)


def init_session_state():
    if 'settings' not in st.session_state:
        st.session_state.settings = None
    if 'api_client' not in st.session_state:
        st.session_state.api_client = None
    if 'session_store' not in st.session_state:
        st.session_state.session_store = None
    if 'auth_checked' not in st.session_state:
        st.session_state.auth_checked = False
    if 'current_path' not in st.session_state:
        st.session_state.current_path = "/"
    if 'return_to' not in st.session_state:
        st.session_state.return_to = None
    if PENDING_BOOKING_KEY not in st.session_state:
        st.session_state[PENDING_BOOKING_KEY] = None
    for key in SCREEN_STATE_KEYS:
        if key not in st.session_state:
            st.session_state[key] = None


def build_services(settings: Settings) -> SessionStore:
    st.session_state.settings = settings
    st.session_state.api_client = ApiClient(settings.api_base_url, timeout=settings.api_timeout_seconds)
    st.session_state.session_store = SessionStore(
        st.session_state.api_client,
        storage=st.session_state,
        navigate=navigate,
    )
    log.info(f"API client ready for {settings.api_base_url}")
    return st.session_state.session_store


def get_session_store() -> SessionStore:
    return st.session_state.session_store


def get_api_client() -> ApiClient:
    return st.session_state.api_client


def get_settings() -> Settings:
    return st.session_state.settings or Settings()


def check_and_restore_session() -> bool:
    """Restore the session from the backend cookie once per browser session."""
    store = get_session_store()
    if store is None or st.session_state.auth_checked:
        return bool(store and store.is_authenticated)
    st.session_state.auth_checked = True
    return store.check_auth()


def clear_screen_state():
    for key in SCREEN_STATE_KEYS:
        st.session_state[key] = None


def navigate(path: str):
    st.session_state.current_path = path
    st.rerun()


def logout():
    clear_screen_state()
    st.session_state.return_to = None
    get_session_store().logout()
