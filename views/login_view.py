import streamlit as st

from use_cases.roles import dashboard_path_for_role
from utils import session_manager

INCOMPLETE_PROFILE_HINT = "The server returned an incomplete account profile. Please try again later or contact support."


def render_auth_screen():
    store = session_manager.get_session_store()

    st.title("💍 Sign in")
    if st.session_state.return_to:
        st.caption(f"Sign in to continue to `{st.session_state.return_to}`.")

    with st.form("login_form", clear_on_submit=False):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if submitted:
        if not email.strip() or not password:
            st.error("Please enter your email and password.")
            return
        if store.login(email.strip(), password):
            target = st.session_state.return_to or dashboard_path_for_role(store.role)
            st.session_state.return_to = None
            session_manager.navigate(target)
        elif store.error_reason == "incomplete_payload":
            st.error(INCOMPLETE_PROFILE_HINT)
        else:
            st.error(store.error or "Login failed")

    if st.button("← Back to home", type="secondary"):
        session_manager.navigate("/")
