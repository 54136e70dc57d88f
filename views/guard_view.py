import streamlit as st

from use_cases.rbac_policy import AccessDecision, AccessStatus
from use_cases.roles import role_label
from use_cases.routes import RouteRule
from utils import session_manager


def render_loading():
    with st.spinner("Checking access..."):
        st.empty()


def render_access_denied(decision: AccessDecision, rule: RouteRule):
    required = rule.required_role or ", ".join(rule.allowed_roles or ())
    st.error("⛔ Access Denied")
    st.write(f"You don't have permission to access this page. This area is restricted to {required} users only.")

    c1, c2 = st.columns(2)
    with c1:
        if st.button("🛡 Go to My Dashboard", type="primary", use_container_width=True):
            session_manager.navigate(decision.own_dashboard)
    with c2:
        if st.button("Return to Home", use_container_width=True):
            session_manager.navigate(decision.home)

    st.caption(f"Current role: {role_label(decision.role)} · Required role: {required}")


def render_locked(decision: AccessDecision, rule: RouteRule):
    if decision.planner_status == "rejected":
        st.error("⚠️ Your planner account has been rejected.")
        st.write("Please review your documents and resubmit them from your profile.")
    else:
        st.warning("⏳ Your planner account is pending approval.")
        st.write(f"**{rule.name}** unlocks once an administrator approves your account.")

    if st.button("Open my profile", type="primary"):
        session_manager.navigate(decision.redirect_to)


def render_decision(decision: AccessDecision, rule: RouteRule) -> bool:
    """Render the non-granted screens; returns True when the page itself may render."""
    if decision.status == AccessStatus.GRANT:
        return True
    if decision.status == AccessStatus.DEFER:
        render_loading()
    elif decision.status == AccessStatus.REDIRECT_LOGIN:
        st.session_state.return_to = decision.return_to
        session_manager.navigate(decision.redirect_to)
    elif decision.status == AccessStatus.DENIED:
        render_access_denied(decision, rule)
    elif decision.status == AccessStatus.LOCKED:
        render_locked(decision, rule)
    return False
