"""Admin review of planner accounts and their permit documents."""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional

from use_cases.booking_actions import require_role
from use_cases.booking_query import AUTH_REQUIRED_MESSAGE, error_message
from use_cases.errors import ClientError, NetworkError, ValidationError

log = logging.getLogger(__name__)

PLANNER_TABS = ("all", "pending", "under_review", "approved", "rejected")
DOCUMENT_DECISIONS = ("approved", "rejected")
BULK_ACTIONS = ("approve_all", "reject_all")
BULK_APPROVE_NOTE = "Bulk approved by admin"
REJECTION_NOTE_REQUIRED = "Please provide a reason for rejecting."


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _checked(data: Any, fallback: str) -> Mapping[str, Any]:
    """Admin endpoints wrap results in {"success": bool, "message": str, ...}."""
    if not isinstance(data, Mapping):
        raise NetworkError("Invalid response received from server")
    if data.get("success") is False:
        raise NetworkError(data.get("message") or fallback, payload=dict(data))
    return data


@dataclass(frozen=True)
class DocumentCounts:
    total: int = 0
    approved: int = 0
    pending: int = 0
    rejected: int = 0

    @classmethod
    def from_api(cls, data: Any) -> "DocumentCounts":
        data = data if isinstance(data, Mapping) else {}
        return cls(**{name: _int(data.get(name)) for name in ("total", "approved", "pending", "rejected")})


@dataclass(frozen=True)
class PlannerStatusCounts:
    total: int = 0
    pending: int = 0
    under_review: int = 0
    approved: int = 0
    rejected: int = 0

    @classmethod
    def from_api(cls, data: Any) -> "PlannerStatusCounts":
        data = data if isinstance(data, Mapping) else {}
        return cls(**{name: _int(data.get(name)) for name in ("total", "pending", "under_review", "approved", "rejected")})

    def as_dict(self) -> Dict[str, int]:
        counts = asdict(self)
        counts["all"] = counts.pop("total")
        return counts


@dataclass(frozen=True)
class PlannerAccount:
    planner_id: int
    name: str
    business_name: str
    email: str
    status: str
    phone: Optional[str] = None
    address: Optional[str] = None
    registration_date: Optional[str] = None
    years_experience: int = 0
    total_bookings: int = 0
    total_packages: int = 0
    rejection_reason: Optional[str] = None
    document_counts: DocumentCounts = DocumentCounts()

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "PlannerAccount":
        return cls(
            planner_id=data.get("id"),
            name=data.get("name") or "",
            business_name=data.get("businessName") or "",
            email=data.get("email") or "",
            status=data.get("status") or "pending",
            phone=data.get("phone"),
            address=data.get("address"),
            registration_date=data.get("registrationDate"),
            years_experience=_int(data.get("yearsExperience")),
            total_bookings=_int(data.get("totalBookings")),
            total_packages=_int(data.get("totalPackages")),
            rejection_reason=data.get("rejectionReason"),
            document_counts=DocumentCounts.from_api(data.get("documentCounts")),
        )


@dataclass(frozen=True)
class PermitDocument:
    document_id: int
    file_url: str
    file_type: str
    status: str
    permit_id: Optional[int] = None
    gov_id_type: Optional[str] = None
    notes: Optional[str] = None
    uploaded_at: Optional[str] = None
    reviewed_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "PermitDocument":
        return cls(
            document_id=data.get("id"),
            file_url=data.get("fileUrl") or "",
            file_type=data.get("fileType") or "",
            status=data.get("status") or "pending",
            permit_id=data.get("permitId"),
            gov_id_type=data.get("govIdType"),
            notes=data.get("notes"),
            uploaded_at=data.get("uploadedAt"),
            reviewed_at=data.get("reviewedAt"),
        )


class PlannerDirectoryQuery:
    """
    Planner list for the admin approval screen.

    ``status_counts`` comes from its own endpoint and is not derived from the
    filtered list, so tab badges stay stable while searching. Failed reads
    keep the previous data and set ``error``.
    """

    def __init__(self, api, session_store):
        self.api = api
        self.session_store = session_store
        self.planners: List[PlannerAccount] = []
        self.status_counts = PlannerStatusCounts()
        self.documents: Dict[int, List[PermitDocument]] = {}
        self.status = "all"
        self.search: Optional[str] = None
        self.loading = False
        self.error: Optional[str] = None

    def _is_admin(self) -> bool:
        store = self.session_store
        return bool(store.is_authenticated and store.user is not None and store.user.role == "admin")

    def fetch(self, status: Optional[str] = None, search: Optional[str] = None) -> bool:
        if not self._is_admin():
            self.error = AUTH_REQUIRED_MESSAGE
            return False

        status = status or "all"
        if status not in PLANNER_TABS:
            raise ValidationError(f"Unknown planner status: {status}")
        search = (search or "").strip() or None

        params = {"search": search, "status": None if status == "all" else status}
        path = "/admin/planners/search" if any(params.values()) else "/admin/planners"

        # The requested filters are kept even when the fetch fails, so refetch retries them.
        self.status, self.search = status, search
        self.loading = True
        self.error = None
        try:
            data = _checked(self.api.get(path, params=params if any(params.values()) else None), "Failed to fetch planners")
            planners = [PlannerAccount.from_api(p) for p in data.get("planners") or []]
        except (ClientError, AttributeError, TypeError, ValueError) as e:
            self.error = error_message(e, "Failed to fetch planners")
            log.error(f"❌ Failed to fetch planners: {e}")
            return False
        finally:
            self.loading = False

        self.planners = planners
        self.fetch_counts()
        return True

    def fetch_counts(self) -> bool:
        """Counts failures are logged only; the badges keep their last values."""
        try:
            data = _checked(self.api.get("/admin/planners/counts"), "Failed to fetch planner counts")
            self.status_counts = PlannerStatusCounts.from_api(data.get("counts"))
        except (ClientError, AttributeError, TypeError, ValueError) as e:
            log.warning(f"⚠️ Failed to fetch planner counts: {e}")
            return False
        return True

    def fetch_documents(self, planner_id: int) -> bool:
        if not self._is_admin():
            self.error = AUTH_REQUIRED_MESSAGE
            return False
        try:
            data = _checked(self.api.get(f"/admin/planners/{planner_id}/documents"), "Failed to fetch documents")
            self.documents[planner_id] = [PermitDocument.from_api(d) for d in data.get("documents") or []]
        except (ClientError, AttributeError, TypeError, ValueError) as e:
            self.error = error_message(e, "Failed to fetch documents")
            log.error(f"❌ Failed to fetch documents for planner {planner_id}: {e}")
            return False
        return True

    def refetch(self) -> bool:
        return self.fetch(self.status, self.search)


def review_document(api, session_store, document_id, status: str, notes: Optional[str] = None) -> dict:
    require_role(session_store, "admin")
    if status not in DOCUMENT_DECISIONS:
        raise ValidationError(f"Unknown document decision: {status}")
    notes = (notes or "").strip() or None
    if status == "rejected" and not notes:
        raise ValidationError(REJECTION_NOTE_REQUIRED)

    result = _checked(
        api.put(f"/admin/planners/documents/{document_id}/status", json={"status": status, "notes": notes}),
        "Failed to update document status",
    )
    log.info(f"Document {document_id} {status} by admin {session_store.user.user_id}")
    return dict(result)


def bulk_review_documents(api, session_store, planner_id, action: str, notes: Optional[str] = None) -> dict:
    require_role(session_store, "admin")
    if action not in BULK_ACTIONS:
        raise ValidationError(f"Unknown bulk action: {action}")
    notes = (notes or "").strip() or None
    if action == "reject_all" and not notes:
        raise ValidationError(REJECTION_NOTE_REQUIRED)

    result = _checked(
        api.put(f"/admin/planners/{planner_id}/documents/bulk", json={"action": action, "notes": notes or BULK_APPROVE_NOTE}),
        "Failed to bulk update documents",
    )
    log.info(f"Planner {planner_id} documents: {action} by admin {session_store.user.user_id}")
    return dict(result)
