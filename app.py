import streamlit as st
from datetime import datetime

from infrastructure.observability import set_user_context, setup_observability
setup_observability()

from use_cases import auth_flow, bootstrap
from use_cases.rbac_policy import evaluate_access
from use_cases.roles import dashboard_path_for_role, role_icon, role_label
from use_cases.routes import find_route
from use_cases.sidebar import LOCK_ICON, build_sidebar_items
from utils import session_manager
from views import (
    booking_form_view,
    bookings_view,
    guard_view,
    login_view,
    payments_view,
    planner_approval_view,
    planner_bookings_view,
    profile_view,
)

# --- PAGE SETTINGS ---
st.set_page_config(page_title="Wedding Planner", page_icon="💍", layout="wide", initial_sidebar_state="expanded")

# Health Check (Basic load-balancer heartbeat)
if st.query_params.get("health") == "1":
    st.write({"status": "ok", "version": "1.0", "uptime": datetime.utcnow().isoformat()})
    st.stop()

PAGES = {
    "/login": login_view.render_auth_screen,
    "/client/bookings": bookings_view.render_my_bookings,
    "/client/payments": payments_view.render_client_payments,
    "/client/book": booking_form_view.render_booking_form,
    "/client/profile": profile_view.render_profile,
    "/planner/profile": profile_view.render_profile,
    "/planner/bookings": planner_bookings_view.render_planner_bookings,
    "/bookings/manage": planner_bookings_view.render_manage_bookings,
    "/admin/planners": planner_approval_view.render_planner_approval,
}


def render_home():
    st.title("💍 Plan your wedding with trusted planners")
    st.write("Browse wedding packages, book a planner and track every payment in one place.")
    if store.user is None:
        if st.button("Sign in", type="primary"):
            session_manager.navigate("/login")
    elif st.button("Go to my dashboard", type="primary"):
        session_manager.navigate(dashboard_path_for_role(store.role))


def render_placeholder(rule):
    st.header(rule.name)
    st.info("This screen is available in the web client.")


def render_sidebar():
    with st.sidebar:
        if store.user is None:
            if st.button("Sign in", key="sidebar_login", use_container_width=True):
                session_manager.navigate("/login")
            return

        st.markdown(f"### {role_icon(store.role)} {store.initials()}")
        st.caption(f"{store.full_name()} · {role_label(store.role)}")
        st.divider()

        for item in build_sidebar_items(store.user):
            label = f"{item.icon} {item.name}"
            if item.badge:
                label += f" · {item.badge}"
            if item.is_logout:
                st.divider()
                if st.button(label, key="logout_btn", type="secondary", use_container_width=True):
                    session_manager.logout()
            elif item.disabled:
                st.button(f"{LOCK_ICON} {item.name}", key=f"nav_{item.name}", disabled=True, use_container_width=True)
            elif st.button(label, key=f"nav_{item.name}_{item.path}", use_container_width=True):
                session_manager.navigate(item.path)


# --- STARTUP ORCHESTRATION ---
startup_result = bootstrap.run_startup()
if startup_result.status == "STOP":
    st.stop()

# --- SESSION RESTORE ---
auth_result = auth_flow.ensure_authenticated_session()
store = session_manager.get_session_store()
set_user_context(auth_result.user_id, store.role)

render_sidebar()

# --- ROUTING ---
path = st.session_state.current_path
if path == "/login" and store.user is not None:
    session_manager.navigate(dashboard_path_for_role(store.role))

rule = find_route(path) or find_route("/not-found")
decision = evaluate_access(store, rule, location=path)

if guard_view.render_decision(decision, rule):
    if rule.path == "/":
        render_home()
    elif rule.path == "/not-found":
        st.header("Page not found")
        if st.button("Return to Home"):
            session_manager.navigate("/")
    else:
        PAGES.get(rule.path, lambda: render_placeholder(rule))()
