import pytest

from use_cases.booking_query import AUTH_REQUIRED_MESSAGE
from use_cases.errors import AccessDenied, NetworkError, ValidationError
from use_cases.planner_approval import (
    BULK_APPROVE_NOTE,
    REJECTION_NOTE_REQUIRED,
    PlannerDirectoryQuery,
    PlannerStatusCounts,
    bulk_review_documents,
    review_document,
)

PLANNERS = [
    {"id": 11, "name": "Ana Cruz", "businessName": "Bloom Events", "email": "ana@bloom.ph", "status": "pending",
     "yearsExperience": "4", "documentCounts": {"total": 2, "approved": 1, "pending": 1, "rejected": 0}},
    {"id": 12, "name": "Ben Reyes", "businessName": "Vow Studio", "email": "ben@vow.ph", "status": "approved"},
]
COUNTS = {"total": 9, "pending": 3, "under_review": 1, "approved": 4, "rejected": 1}


def fake_admin_backend(path, params=None):
    if path == "/admin/planners/counts":
        return {"success": True, "counts": COUNTS}
    if path.endswith("/documents"):
        return {"success": True, "documents": [
            {"id": 501, "fileUrl": "https://files.example/permit.pdf", "fileType": "pdf", "status": "pending",
             "govIdType": "Mayor's permit", "uploadedAt": "2026-09-01"},
        ]}
    rows = PLANNERS
    if params and params.get("status"):
        rows = [p for p in rows if p["status"] == params["status"]]
    return {"success": True, "planners": rows}


@pytest.fixture
def directory(api, make_store):
    api.get.side_effect = fake_admin_backend
    return PlannerDirectoryQuery(api, make_store(role="admin"))


def test_fetch_lists_planners_and_counts(directory, api):
    assert directory.fetch() is True

    assert api.get.call_args_list[0].args == ("/admin/planners",)
    assert api.get.call_args_list[0].kwargs == {"params": None}
    assert [p.planner_id for p in directory.planners] == [11, 12]
    assert directory.planners[0].business_name == "Bloom Events"
    assert directory.planners[0].years_experience == 4
    assert directory.planners[0].document_counts.pending == 1
    assert directory.planners[1].document_counts.total == 0
    assert directory.status_counts == PlannerStatusCounts(**COUNTS)


def test_filters_use_search_endpoint(directory, api):
    directory.fetch(status="approved", search="  vow ")

    api.get.assert_any_call("/admin/planners/search", params={"search": "vow", "status": "approved"})
    assert [p.planner_id for p in directory.planners] == [12]
    assert directory.status == "approved"
    assert directory.search == "vow"


def test_tab_counts_do_not_follow_filtered_list(directory):
    directory.fetch(status="approved")

    counts = directory.status_counts.as_dict()
    assert len(directory.planners) == 1
    assert counts["all"] == 9
    assert counts["pending"] == 3


def test_failed_counts_keep_last_badges(directory, api):
    directory.fetch()

    def counts_down(path, params=None):
        if path == "/admin/planners/counts":
            raise NetworkError("Server error", status_code=500)
        return fake_admin_backend(path, params)

    api.get.side_effect = counts_down
    assert directory.fetch(status="pending") is True

    assert directory.error is None
    assert directory.status_counts.total == 9


def test_failed_fetch_keeps_planners_and_requested_filters(directory, api):
    directory.fetch()
    api.get.side_effect = NetworkError("Failed to fetch planners", status_code=500)

    assert directory.fetch(status="rejected", search="bloom") is False

    assert directory.error == "Failed to fetch planners"
    assert len(directory.planners) == 2
    assert (directory.status, directory.search) == ("rejected", "bloom")
    assert directory.loading is False

    api.get.side_effect = fake_admin_backend
    api.get.reset_mock()
    assert directory.refetch() is True
    api.get.assert_any_call("/admin/planners/search", params={"search": "bloom", "status": "rejected"})


def test_unsuccessful_envelope_is_an_error(directory, api):
    api.get.side_effect = None
    api.get.return_value = {"success": False, "message": "Admin access required"}

    assert directory.fetch() is False
    assert directory.error == "Admin access required"


def test_unknown_tab_is_rejected(directory, api):
    with pytest.raises(ValidationError):
        directory.fetch(status="archived")
    api.get.assert_not_called()


@pytest.mark.parametrize("role", ["client", "planner", None])
def test_non_admins_get_auth_error_without_request(api, make_store, role):
    query = PlannerDirectoryQuery(api, make_store(role=role))
    assert query.fetch() is False
    assert query.error == AUTH_REQUIRED_MESSAGE
    api.get.assert_not_called()


def test_fetch_documents(directory, api):
    assert directory.fetch_documents(11) is True

    api.get.assert_called_once_with("/admin/planners/11/documents")
    [doc] = directory.documents[11]
    assert doc.document_id == 501
    assert doc.gov_id_type == "Mayor's permit"
    assert doc.status == "pending"


def test_review_document_approve(api, make_store):
    api.put.return_value = {"success": True, "message": "Document approved"}

    result = review_document(api, make_store(role="admin"), 501, "approved")

    api.put.assert_called_once_with("/admin/planners/documents/501/status", json={"status": "approved", "notes": None})
    assert result["success"] is True


def test_rejecting_a_document_needs_notes(api, make_store):
    with pytest.raises(ValidationError) as exc:
        review_document(api, make_store(role="admin"), 501, "rejected", "   ")
    assert exc.value.message == REJECTION_NOTE_REQUIRED
    api.put.assert_not_called()

    api.put.return_value = {"success": True}
    review_document(api, make_store(role="admin"), 501, "rejected", "Blurry scan")
    api.put.assert_called_once_with("/admin/planners/documents/501/status",
                                    json={"status": "rejected", "notes": "Blurry scan"})


def test_review_document_unsuccessful_envelope_raises(api, make_store):
    api.put.return_value = {"success": False, "message": "Document not found"}
    with pytest.raises(NetworkError) as exc:
        review_document(api, make_store(role="admin"), 999, "approved")
    assert exc.value.message == "Document not found"


def test_bulk_approve_uses_default_note(api, make_store):
    api.put.return_value = {"success": True}

    bulk_review_documents(api, make_store(role="admin"), 11, "approve_all")

    api.put.assert_called_once_with("/admin/planners/11/documents/bulk",
                                    json={"action": "approve_all", "notes": BULK_APPROVE_NOTE})


def test_bulk_reject_needs_notes(api, make_store):
    with pytest.raises(ValidationError):
        bulk_review_documents(api, make_store(role="admin"), 11, "reject_all")
    with pytest.raises(ValidationError):
        bulk_review_documents(api, make_store(role="admin"), 11, "archive_all", "x")
    api.put.assert_not_called()


@pytest.mark.parametrize("role", ["client", "planner"])
def test_document_review_is_admin_only(api, make_store, role):
    with pytest.raises(AccessDenied):
        review_document(api, make_store(role=role), 501, "approved")
    with pytest.raises(AccessDenied):
        bulk_review_documents(api, make_store(role=role), 11, "approve_all")
    api.put.assert_not_called()
