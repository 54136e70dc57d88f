import time

import pandas as pd
import streamlit as st

from use_cases.booking_actions import cancel_booking
from use_cases.booking_models import Booking, BookingStatus, booking_status_style, payment_status_label
from use_cases.booking_query import ClientBookingsQuery, SearchDebouncer, fetch_booking_details
from use_cases.errors import ClientError
from utils import session_manager

TABS = ("all", "pending", "confirmed", "completed", "cancelled")


def _get_query() -> ClientBookingsQuery:
    if st.session_state.bookings_query is None:
        query = ClientBookingsQuery(session_manager.get_api_client(), session_manager.get_session_store())
        query.fetch()
        st.session_state.bookings_query = query
    return st.session_state.bookings_query


def _get_debouncer() -> SearchDebouncer:
    if st.session_state.search_debouncer is None:
        settings = session_manager.get_settings()
        st.session_state.search_debouncer = SearchDebouncer(settings.search_debounce_ms)
    return st.session_state.search_debouncer


def bookings_frame(bookings) -> pd.DataFrame:
    rows = []
    for b in bookings:
        style = booking_status_style(b.status if b.status is not None else b.raw_status)
        rows.append({
            "ID": b.booking_id,
            "Package": b.package_title,
            "Planner": b.business_name or b.planner_name,
            "Date": b.wedding_date,
            "Location": b.wedding_location,
            "Price": b.package_price,
            "Status": f"{style['icon']} {style['label']}",
            "Payment": payment_status_label(b.payment),
        })
    return pd.DataFrame(rows, columns=["ID", "Package", "Planner", "Date", "Location", "Price", "Status", "Payment"])


def _apply_search(query: ClientBookingsQuery, debouncer: SearchDebouncer, term: str):
    debouncer.submit(term, time.monotonic())
    wait = debouncer.remaining(time.monotonic())
    if wait:
        # A newer keystroke interrupts this rerun before the sleep ends.
        time.sleep(wait)
    due = debouncer.due(time.monotonic())
    if due is not None and query.search(due):
        debouncer.mark_applied(due)


def _render_cancel(query: ClientBookingsQuery, booking: Booking):
    with st.form(f"cancel_{booking.booking_id}"):
        st.write(f"Cancel **{booking.package_title}** on {booking.wedding_date}?")
        reason = st.text_area("Reason for cancellation")
        if st.form_submit_button("Cancel booking", type="primary"):
            try:
                cancel_booking(query.api, query.session_store, booking.booking_id, reason, require_reason=True)
            except ClientError as e:
                st.error(getattr(e, "message", str(e)))
            else:
                st.success("Booking cancelled.")
                query.refetch()
                st.rerun()


def _render_details(query: ClientBookingsQuery, bookings):
    with st.expander("🔍 Booking details"):
        choice = st.selectbox(
            "Booking",
            bookings,
            format_func=lambda b: f"#{b.booking_id} · {b.package_title} · {b.wedding_date}",
            key="details_booking",
        )
        if not st.button("Load details"):
            return
        try:
            booking = fetch_booking_details(query.api, query.session_store, choice.booking_id)
        except ClientError as e:
            st.error(getattr(e, "message", str(e)))
            return
        st.markdown(f"**{booking.package_title}** with {booking.business_name or booking.planner_name}")
        st.write(f"📍 {booking.wedding_location or 'Venue to be confirmed'} · 📅 {booking.wedding_date}")
        st.write(f"Payment: {payment_status_label(booking.payment)}")
        if booking.special_requests:
            st.caption(booking.special_requests)


def render_my_bookings():
    query = _get_query()
    debouncer = _get_debouncer()

    st.header("📅 My Bookings")

    if st.button("➕ New booking"):
        session_manager.navigate("/client/book")

    term = st.text_input("Search bookings", value=query.filters.search or "", placeholder="Package, planner or venue")
    if term != (query.filters.search or ""):
        _apply_search(query, debouncer, term)

    counts = query.tab_counts()
    active = query.filters.status.value if query.filters.status else "all"
    tab = st.radio(
        "Status",
        TABS,
        index=TABS.index(active),
        horizontal=True,
        format_func=lambda t: f"{t.capitalize()} ({counts[t]})",
        label_visibility="collapsed",
    )
    if tab != active:
        query.filter_by_status(None if tab == "all" else BookingStatus(tab))
        st.rerun()

    if query.error:
        st.error(f"❌ {query.error}")
        if st.button("🔄 Retry"):
            query.retry()
            st.rerun()

    c1, c2, c3 = st.columns(3)
    c1.metric("Upcoming", query.summary.upcoming)
    c2.metric("Completed", query.summary.completed)
    c3.metric("Cancelled", query.summary.cancelled)

    if len(query.bookings) == 0:
        st.info("No bookings match the current filters.")
        if st.button("Browse services"):
            session_manager.navigate("/services")
        return

    for label, group in (("Upcoming", query.bookings.upcoming),
                         ("Completed", query.bookings.completed),
                         ("Cancelled", query.bookings.cancelled)):
        if not group:
            continue
        st.subheader(label)
        st.dataframe(bookings_frame(group), use_container_width=True, hide_index=True)

    cancellable = [b for b in query.bookings.upcoming if b.status in (BookingStatus.PENDING, BookingStatus.CONFIRMED)]
    if cancellable:
        with st.expander("✖️ Cancel a booking"):
            choice = st.selectbox(
                "Booking",
                cancellable,
                format_func=lambda b: f"#{b.booking_id} · {b.package_title} · {b.wedding_date}",
            )
            _render_cancel(query, choice)

    _render_details(query, query.bookings.all())

    if query.pagination and (query.pagination.has_prev or query.pagination.has_next):
        p1, p2 = st.columns(2)
        if query.pagination.has_prev and p1.button("← Previous"):
            query.change_page(query.pagination.current_page - 1)
            st.rerun()
        if query.pagination.has_next and p2.button("Next →"):
            query.change_page(query.pagination.current_page + 1)
            st.rerun()
