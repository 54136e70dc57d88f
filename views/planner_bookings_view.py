import streamlit as st

from use_cases.booking_actions import confirm_booking, update_status
from use_cases.booking_models import ALLOWED_TRANSITIONS, BookingStatus, PaymentStatus, categorize, payment_status_label
from use_cases.booking_query import PlannerBookingsQuery
from use_cases.errors import ClientError
from use_cases.payments import reject_payment, verify_payment
from use_cases.planner_approval import PlannerDirectoryQuery
from utils import session_manager
from views.bookings_view import bookings_frame


def _get_query(state_key: str) -> PlannerBookingsQuery:
    if st.session_state[state_key] is None:
        store = session_manager.get_session_store()
        query = PlannerBookingsQuery(session_manager.get_api_client(), store)
        if store.role == "planner":
            query.fetch()
        st.session_state[state_key] = query
    return st.session_state[state_key]


def _render_status_update(query: PlannerBookingsQuery):
    movable = [b for b in query.bookings if b.status is not None and ALLOWED_TRANSITIONS[b.status]]
    if not movable:
        return
    with st.expander("🔁 Update booking status"):
        booking = st.selectbox("Booking", movable, format_func=lambda b: f"#{b.booking_id} · {b.client_name} · {b.raw_status}")
        target = st.selectbox("New status", sorted(s.value for s in ALLOWED_TRANSITIONS[booking.status]))
        notes = st.text_input("Notes", key="status_notes")
        if st.button("Save status", type="primary"):
            try:
                if target == BookingStatus.CONFIRMED.value and not notes:
                    confirm_booking(query.api, query.session_store, booking.booking_id, current_status=booking.status)
                else:
                    update_status(query.api, query.session_store, booking.booking_id, target, notes or None,
                                  current_status=booking.status)
            except ClientError as e:
                st.error(getattr(e, "message", str(e)))
            else:
                query.refetch()
                st.rerun()


def _render_payment_review(query: PlannerBookingsQuery):
    pending = [b for b in query.bookings if b.payment is not None and b.payment.status == PaymentStatus.PENDING]
    if not pending:
        return
    with st.expander(f"🧾 Receipts awaiting review ({len(pending)})"):
        for b in pending:
            st.markdown(f"**#{b.booking_id} · {b.client_name}** · ₱{b.payment.amount:,.2f} · {payment_status_label(b.payment)}")
            reason = st.text_input("Rejection reason", key=f"reject_reason_{b.payment.payment_id}")
            c1, c2 = st.columns(2)
            try:
                if c1.button("✅ Verify", key=f"verify_{b.payment.payment_id}"):
                    verify_payment(query.api, query.session_store, b.payment.payment_id)
                    query.refetch()
                    st.rerun()
                if c2.button("⛔ Reject", key=f"reject_{b.payment.payment_id}"):
                    reject_payment(query.api, query.session_store, b.payment.payment_id, reason)
                    query.refetch()
                    st.rerun()
            except ClientError as e:
                st.error(getattr(e, "message", str(e)))
            st.divider()


def _render_bookings(query: PlannerBookingsQuery, title: str):
    st.header(title)

    if query.error:
        st.error(f"❌ {query.error}")
        if st.button("🔄 Retry"):
            query.refetch()
            st.rerun()

    if not query.bookings:
        st.info("No bookings yet.")
        return

    grouped = categorize(query.bookings)
    for label, group in (("Upcoming", grouped.upcoming), ("Completed", grouped.completed), ("Cancelled", grouped.cancelled)):
        if group:
            st.subheader(f"{label} ({len(group)})")
            st.dataframe(bookings_frame(group), use_container_width=True, hide_index=True)

    _render_status_update(query)
    _render_payment_review(query)


def render_planner_bookings():
    _render_bookings(_get_query("planner_bookings_query"), "🗂 Bookings")


def _render_planner_picker(query: PlannerBookingsQuery):
    if st.session_state.manage_planner_picker is None:
        picker = PlannerDirectoryQuery(session_manager.get_api_client(), session_manager.get_session_store())
        picker.fetch(status="approved")
        st.session_state.manage_planner_picker = picker
    picker = st.session_state.manage_planner_picker

    if picker.error:
        st.error(f"❌ {picker.error}")
    if not picker.planners:
        st.info("No approved planners yet.")
        return

    ids = [p.planner_id for p in picker.planners]
    names = {p.planner_id: f"{p.business_name or p.name} · {p.email}" for p in picker.planners}
    selected = st.selectbox(
        "Planner",
        ids,
        index=ids.index(query.planner_id) if query.planner_id in ids else None,
        format_func=names.get,
        placeholder="Choose a planner",
    )
    if selected is not None and selected != query.planner_id:
        query.select_planner(selected)
        st.rerun()


def render_manage_bookings():
    store = session_manager.get_session_store()
    query = _get_query("manage_bookings_query")
    if store.role == "admin":
        _render_planner_picker(query)
        if query.planner_id is None:
            return
    _render_bookings(query, "🗂 Manage Bookings")
