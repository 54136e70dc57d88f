import pandas as pd
import streamlit as st

from use_cases.booking_models import payment_status_label
from use_cases.payments import ClientPaymentsQuery, create_payment, fetch_invoice
from use_cases.errors import ClientError
from utils import session_manager


def _get_query() -> ClientPaymentsQuery:
    if st.session_state.payments_query is None:
        query = ClientPaymentsQuery(session_manager.get_api_client(), session_manager.get_session_store())
        query.fetch()
        st.session_state.payments_query = query
    return st.session_state.payments_query


def render_client_payments():
    query = _get_query()
    st.header("💳 Payments")

    if query.error:
        st.error(f"❌ {query.error}")
        if st.button("🔄 Retry"):
            query.refetch()
            st.rerun()

    c1, c2, c3 = st.columns(3)
    c1.metric("Total paid", f"₱{query.summary.total_amount:,.2f}")
    c2.metric("Verified", f"₱{query.summary.verified_amount:,.2f}")
    c3.metric("Pending", f"₱{query.summary.pending_amount:,.2f}")

    if query.invoices:
        st.subheader("Invoices")
        invoices_df = pd.DataFrame(
            [(i.booking_id, i.package_title, i.business_name, i.package_price, i.total_paid, i.balance, i.invoice_status)
             for i in query.invoices],
            columns=["Booking", "Package", "Planner", "Price", "Paid", "Balance", "Status"],
        )
        st.dataframe(invoices_df, use_container_width=True, hide_index=True)

    st.subheader("Payment history")
    if not query.payments:
        st.info("No payments yet.")
    else:
        payments_df = pd.DataFrame(
            [(p.payment_id, p.booking_id, p.amount, p.uploaded_at, payment_status_label(p)) for p in query.payments],
            columns=["Payment", "Booking", "Amount", "Uploaded", "Status"],
        )
        st.dataframe(payments_df, use_container_width=True, hide_index=True)

    with st.expander("📤 Upload a receipt"):
        with st.form("upload_receipt"):
            booking_id = st.number_input("Booking ID", min_value=1, step=1)
            amount = st.number_input("Amount", min_value=0.0, step=100.0)
            upload = st.file_uploader("Receipt", type=["png", "jpg", "jpeg", "pdf"])
            if st.form_submit_button("Upload", type="primary"):
                receipt = (upload.name, upload.getvalue(), upload.type) if upload else None
                try:
                    create_payment(query.api, query.session_store, int(booking_id), amount, receipt)
                except ClientError as e:
                    st.error(getattr(e, "message", str(e)))
                else:
                    st.success("Receipt uploaded. It will be verified by your planner.")
                    query.refetch()

    with st.expander("🧾 Generate invoice"):
        booking_id = st.number_input("Booking ID", min_value=1, step=1, key="invoice_booking_id")
        if st.button("Generate"):
            try:
                invoice = fetch_invoice(query.api, query.session_store, int(booking_id))
            except ClientError as e:
                st.error(getattr(e, "message", str(e)))
            else:
                title = invoice.get('invoice_number') or f"Booking #{int(booking_id)}"
                st.markdown(f"**{title}** · {invoice.get('package_title', '')}")
                c1, c2, c3 = st.columns(3)
                c1.metric("Total", f"₱{float(invoice.get('total_amount') or 0):,.2f}")
                c2.metric("Paid", f"₱{float(invoice.get('total_paid') or 0):,.2f}")
                c3.metric("Balance", f"₱{float(invoice.get('balance') or 0):,.2f}")
                st.caption(f"Status: {invoice.get('status', 'unpaid')} · Due {invoice.get('due_date') or 'n/a'}")
