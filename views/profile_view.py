import streamlit as st

from use_cases.roles import role_icon, role_label
from utils import session_manager

PLANNER_STATUS_MESSAGES = {
    "pending": ("⏳", "Your documents are waiting for review. Planner tools unlock once you are approved."),
    "approved": ("✅", "Your planner account is approved."),
    "rejected": ("⛔", "Your application was rejected. Please upload corrected documents."),
}


def render_profile():
    store = session_manager.get_session_store()
    user = store.user
    st.header(f"{role_icon(store.role)} {store.full_name()}")
    st.caption(f"{user.email} · {role_label(store.role)}")

    if store.role == "planner":
        icon, message = PLANNER_STATUS_MESSAGES.get(store.planner_status(), PLANNER_STATUS_MESSAGES["pending"])
        st.info(f"{icon} {message}")
        if user.planner_profile and user.planner_profile.business_name:
            st.markdown(f"**Business:** {user.planner_profile.business_name}")

    with st.form("profile_form"):
        c1, c2 = st.columns(2)
        first_name = c1.text_input("First name", value=user.first_name)
        last_name = c2.text_input("Last name", value=user.last_name)
        phone = st.text_input("Phone", value=user.phone or "")
        location = st.text_input("Location", value=user.location or "")
        bio = st.text_area("Bio", value=user.bio or "")
        if st.form_submit_button("Save profile", type="primary"):
            changes = {
                "first_name": first_name.strip(),
                "last_name": last_name.strip(),
                "phone": phone.strip() or None,
                "location": location.strip() or None,
                "bio": bio.strip() or None,
            }
            if store.update_profile(changes):
                st.success("Profile updated.")
                st.rerun()
            else:
                st.error(f"❌ {store.error or 'Failed to update profile'}")
