from unittest.mock import MagicMock, patch

import streamlit as st

from infrastructure.api.http_client import ApiClient
from infrastructure.config import Settings
from tests.factories import make_user
from use_cases.booking_actions import BookingDraft
from use_cases.session_store import SessionStore
from utils import session_manager


def test_init_session_state():
    st.session_state.clear()
    session_manager.init_session_state()
    assert st.session_state.session_store is None
    assert st.session_state.auth_checked is False
    assert st.session_state.current_path == "/"
    assert st.session_state.return_to is None
    assert st.session_state.pending_booking is None
    for key in session_manager.SCREEN_STATE_KEYS:
        assert key in st.session_state


def test_init_session_state_keeps_existing_values():
    st.session_state.clear()
    st.session_state.current_path = "/client/bookings"
    session_manager.init_session_state()
    assert st.session_state.current_path == "/client/bookings"


def test_build_services():
    st.session_state.clear()
    session_manager.init_session_state()
    store = session_manager.build_services(Settings(api_base_url="http://backend.test/api", api_timeout_seconds=7))

    assert session_manager.get_session_store() is store
    client = session_manager.get_api_client()
    assert isinstance(client, ApiClient)
    assert client.base_url == "http://backend.test/api"
    assert client.timeout == 7
    assert store.api is client
    assert session_manager.get_settings().api_timeout_seconds == 7


def test_check_and_restore_session_runs_once():
    st.session_state.clear()
    session_manager.init_session_state()
    store = MagicMock()
    store.check_auth.return_value = True
    store.is_authenticated = True
    st.session_state.session_store = store

    assert session_manager.check_and_restore_session() is True
    assert session_manager.check_and_restore_session() is True

    store.check_auth.assert_called_once()


@patch("streamlit.rerun")
def test_navigate(mock_rerun):
    st.session_state.clear()
    session_manager.navigate("/client/payments")
    assert st.session_state.current_path == "/client/payments"
    mock_rerun.assert_called_once()


@patch("streamlit.rerun")
def test_logout(mock_rerun):
    st.session_state.clear()
    session_manager.init_session_state()
    api = MagicMock(spec=ApiClient)
    store = SessionStore(api, storage=st.session_state, navigate=session_manager.navigate)
    store.user = make_user("planner", "pending")
    store.is_authenticated = True
    st.session_state.session_store = store
    st.session_state.bookings_query = object()
    st.session_state.manage_bookings_query = object()
    st.session_state.admin_planners_query = object()
    st.session_state.booking_step = "confirmation"
    st.session_state.return_to = "/planner/bookings"
    st.session_state.pending_booking = BookingDraft(venue="Tagaytay")

    session_manager.logout()

    api.post.assert_called_once_with("/auth/logout")
    mock_rerun.assert_called_once()
    assert store.user is None
    assert store.is_authenticated is False
    assert st.session_state.current_path == "/login"
    assert st.session_state.return_to is None
    assert st.session_state.bookings_query is None
    assert st.session_state.manage_bookings_query is None
    assert st.session_state.admin_planners_query is None
    assert st.session_state.booking_step is None
    assert "pending_booking" not in st.session_state
