from datetime import date, time

import streamlit as st

from use_cases.booking_actions import PAYMENT_METHODS, BookingDraft, create_booking
from use_cases.errors import ClientError, ValidationError
from use_cases.session_store import PENDING_BOOKING_KEY
from utils import session_manager

PAYMENT_LABELS = {"gcash": "GCash", "maya": "Maya", "bank_transfer": "Bank transfer"}


def _get_draft() -> BookingDraft:
    # Survives reruns and is dropped on logout.
    if st.session_state.get(PENDING_BOOKING_KEY) is None:
        st.session_state[PENDING_BOOKING_KEY] = BookingDraft()
    return st.session_state[PENDING_BOOKING_KEY]


def _render_details(draft: BookingDraft):
    with st.form("booking_details"):
        picked_date = st.date_input("Wedding date", value=date.fromisoformat(draft.wedding_date) if draft.wedding_date else None)
        picked_time = st.time_input("Wedding time", value=time.fromisoformat(draft.wedding_time) if draft.wedding_time else None)
        venue = st.text_input("Venue", value=draft.venue)
        requests_text = st.text_area("Special requests", value=draft.special_requests)
        if st.form_submit_button("Continue", type="primary"):
            draft.wedding_date = picked_date.isoformat() if picked_date else ""
            draft.wedding_time = picked_time.strftime("%H:%M") if picked_time else ""
            draft.venue = venue
            draft.special_requests = requests_text
            errors = draft.validate_step("details")
            if errors:
                for message in errors:
                    st.error(message)
            else:
                st.session_state.booking_step = "confirmation"
                st.rerun()


def _render_confirmation(draft: BookingDraft, package_id: int):
    st.caption(f"{draft.wedding_date} {draft.wedding_time} · {draft.venue}")
    with st.form("booking_confirmation"):
        method = st.selectbox("Payment method", PAYMENT_METHODS, format_func=PAYMENT_LABELS.get,
                              index=PAYMENT_METHODS.index(draft.payment_method) if draft.payment_method in PAYMENT_METHODS else None)
        amount = st.number_input("Down payment", min_value=0.0, step=500.0, value=float(draft.payment_amount))
        upload = st.file_uploader("Payment receipt", type=["png", "jpg", "jpeg", "pdf"])
        terms = st.checkbox("I agree to the Terms and Conditions", value=draft.agreed_to_terms)
        privacy = st.checkbox("I agree to the Privacy Policy", value=draft.agreed_to_privacy)
        back = st.form_submit_button("← Back")
        submitted = st.form_submit_button("Submit booking", type="primary")

    if back:
        st.session_state.booking_step = "details"
        st.rerun()
    if not submitted:
        return

    draft.payment_method = method or ""
    draft.payment_amount = amount
    if upload is not None:
        draft.receipt = (upload.name, upload.getvalue(), upload.type)
    draft.agreed_to_terms = terms
    draft.agreed_to_privacy = privacy

    store = session_manager.get_session_store()
    try:
        create_booking(session_manager.get_api_client(), store, package_id, draft)
    except ValidationError as e:
        for message in e.errors:
            st.error(message)
        return
    except ClientError as e:
        st.error(getattr(e, "message", str(e)))
        return

    st.session_state[PENDING_BOOKING_KEY] = None
    st.session_state.booking_step = "details"
    st.session_state.bookings_query = None
    st.success("🎉 Booking submitted. Your planner will confirm it shortly.")
    if st.button("Go to My Bookings", type="primary"):
        session_manager.navigate("/client/bookings")


def render_booking_form():
    st.header("💍 Book a Package")
    draft = _get_draft()
    step = st.session_state.booking_step or "details"

    package_id = st.number_input("Package ID", min_value=1, step=1, key="booking_package_id")

    if step == "details":
        _render_details(draft)
    else:
        _render_confirmation(draft, int(package_id))

    if st.button("Discard draft"):
        st.session_state[PENDING_BOOKING_KEY] = None
        st.session_state.booking_step = "details"
        st.rerun()
