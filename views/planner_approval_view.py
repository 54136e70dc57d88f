import pandas as pd
import streamlit as st

from use_cases.errors import ClientError
from use_cases.planner_approval import (
    PLANNER_TABS,
    PlannerAccount,
    PlannerDirectoryQuery,
    bulk_review_documents,
    review_document,
)
from utils import session_manager

STATUS_BADGES = {"pending": "⏳", "under_review": "🔎", "approved": "✅", "rejected": "⛔"}


def _get_query() -> PlannerDirectoryQuery:
    if st.session_state.admin_planners_query is None:
        query = PlannerDirectoryQuery(session_manager.get_api_client(), session_manager.get_session_store())
        query.fetch()
        st.session_state.admin_planners_query = query
    return st.session_state.admin_planners_query


def planners_frame(planners) -> pd.DataFrame:
    rows = [{
        "ID": p.planner_id,
        "Business": p.business_name,
        "Owner": p.name,
        "Email": p.email,
        "Status": f"{STATUS_BADGES.get(p.status, '❔')} {p.status.replace('_', ' ').title()}",
        "Documents": f"{p.document_counts.approved}/{p.document_counts.total} approved",
        "Bookings": p.total_bookings,
        "Registered": p.registration_date,
    } for p in planners]
    return pd.DataFrame(rows, columns=["ID", "Business", "Owner", "Email", "Status", "Documents", "Bookings", "Registered"])


def _show_error(e: ClientError):
    st.error(getattr(e, "message", str(e)))


def _render_documents(query: PlannerDirectoryQuery, planner: PlannerAccount):
    if planner.planner_id not in query.documents:
        query.fetch_documents(planner.planner_id)
    documents = query.documents.get(planner.planner_id, [])
    if not documents:
        st.info("No documents uploaded yet.")
        return

    for doc in documents:
        with st.container(border=True):
            st.markdown(f"**{doc.gov_id_type or doc.file_type or 'Document'}** · {doc.status.title()}")
            st.caption(f"Uploaded {doc.uploaded_at or 'n/a'}")
            if doc.file_url:
                st.link_button("Open file", doc.file_url)
            if doc.status != "pending":
                continue
            notes = st.text_input("Notes", key=f"doc_notes_{doc.document_id}")
            c1, c2 = st.columns(2)
            try:
                if c1.button("✅ Approve", key=f"doc_approve_{doc.document_id}"):
                    review_document(query.api, query.session_store, doc.document_id, "approved", notes)
                    _refresh(query, planner.planner_id)
                if c2.button("⛔ Reject", key=f"doc_reject_{doc.document_id}"):
                    review_document(query.api, query.session_store, doc.document_id, "rejected", notes)
                    _refresh(query, planner.planner_id)
            except ClientError as e:
                _show_error(e)

    with st.form(f"bulk_{planner.planner_id}"):
        action = st.radio("Bulk action", ("approve_all", "reject_all"), horizontal=True,
                          format_func=lambda a: "Approve all" if a == "approve_all" else "Reject all")
        notes = st.text_input("Notes (required to reject)")
        if st.form_submit_button("Apply", type="primary"):
            try:
                bulk_review_documents(query.api, query.session_store, planner.planner_id, action, notes)
            except ClientError as e:
                _show_error(e)
            else:
                _refresh(query, planner.planner_id)


def _refresh(query: PlannerDirectoryQuery, planner_id: int):
    query.documents.pop(planner_id, None)
    query.refetch()
    st.rerun()


def render_planner_approval():
    query = _get_query()
    st.header("🧑‍💼 Planner Approval")

    term = st.text_input("Search planners", value=query.search or "", placeholder="Name, business or email")
    counts = query.status_counts.as_dict()
    tab = st.radio(
        "Status",
        PLANNER_TABS,
        index=PLANNER_TABS.index(query.status),
        horizontal=True,
        format_func=lambda t: f"{t.replace('_', ' ').title()} ({counts[t]})",
        label_visibility="collapsed",
    )
    if tab != query.status or (term.strip() or None) != query.search:
        query.fetch(tab, term)
        st.rerun()

    if query.error:
        st.error(f"❌ {query.error}")
        if st.button("🔄 Retry"):
            query.refetch()
            st.rerun()

    if not query.planners:
        st.info("No planners match the current filters.")
        return

    st.dataframe(planners_frame(query.planners), use_container_width=True, hide_index=True)

    by_id = {p.planner_id: p for p in query.planners}
    selected = st.selectbox(
        "Review documents for",
        list(by_id),
        format_func=lambda pid: f"{by_id[pid].business_name or by_id[pid].name} · {by_id[pid].status}",
    )
    if selected is not None:
        _render_documents(query, by_id[selected])
