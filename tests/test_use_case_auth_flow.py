from unittest.mock import MagicMock, patch

import streamlit as st

from tests.factories import make_user
from use_cases import auth_flow


@patch("use_cases.auth_flow.session_manager.check_and_restore_session")
@patch("use_cases.auth_flow.session_manager.init_session_state")
def test_ensure_authenticated_session_stop_without_user(mock_init, mock_restore):
    st.session_state.clear()
    st.session_state.session_store = MagicMock(user=None)

    result = auth_flow.ensure_authenticated_session()

    assert result.status == "STOP"
    assert result.reason == "auth_required"
    mock_init.assert_called_once()
    mock_restore.assert_called_once()


@patch("use_cases.auth_flow.session_manager.check_and_restore_session")
@patch("use_cases.auth_flow.session_manager.init_session_state")
def test_ensure_authenticated_session_stop_without_store(mock_init, mock_restore):
    st.session_state.clear()
    st.session_state.session_store = None

    assert auth_flow.ensure_authenticated_session().status == "STOP"


@patch("use_cases.auth_flow.session_manager.check_and_restore_session")
@patch("use_cases.auth_flow.session_manager.init_session_state")
def test_ensure_authenticated_session_continue_with_user(mock_init, mock_restore):
    st.session_state.clear()
    store = MagicMock(user=None)
    st.session_state.session_store = store

    def restore():
        store.user = make_user("client", user_id=42)
        return True

    mock_restore.side_effect = restore
    result = auth_flow.ensure_authenticated_session()

    assert result.status == "CONTINUE"
    assert result.user_id == 42
    mock_init.assert_called_once()
    mock_restore.assert_called_once()
