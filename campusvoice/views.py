"""
View models for the three CampusVoice screens.

Each view is a plain function (or small dataclass) of API responses plus
local UI-only state: the submission form, the tracking lookup and the
admin dashboard. Nothing here talks to the network; see client.py.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs

from campusvoice.models.complaints import ComplaintCategory, ComplaintLocation, ComplaintStatus

logger = logging.getLogger(__name__)

CATEGORY_LABELS = {
    ComplaintCategory.infrastructure.value: "Infrastructure",
    ComplaintCategory.technology.value: "Technology",
    ComplaintCategory.utilities.value: "Utilities",
    ComplaintCategory.safety.value: "Safety & Security",
    ComplaintCategory.sanitation.value: "Sanitation",
    ComplaintCategory.other.value: "Other",
}

LOCATION_LABELS = {
    ComplaintLocation.main_building.value: "Main Building",
    ComplaintLocation.library.value: "Library",
    ComplaintLocation.science_block.value: "Science Block",
    ComplaintLocation.cafeteria.value: "Cafeteria",
    ComplaintLocation.sports_complex.value: "Sports Complex",
    ComplaintLocation.dormitory.value: "Dormitory",
    ComplaintLocation.parking.value: "Parking Area",
    ComplaintLocation.outdoor.value: "Outdoor/Campus Grounds",
    ComplaintLocation.other.value: "Other",
}

STATUS_LABELS = {
    ComplaintStatus.pending.value: "Pending Review",
    ComplaintStatus.in_progress.value: "In Progress",
    ComplaintStatus.resolved.value: "Resolved",
}

STATUS_DESCRIPTIONS = {
    ComplaintStatus.pending.value: "Your issue is awaiting review by the administration.",
    ComplaintStatus.in_progress.value: "The administration is actively working on your issue.",
    ComplaintStatus.resolved.value: "Your issue has been resolved.",
}

NOT_FOUND_MESSAGE = "No complaint found with this ID. Please check and try again."
TRANSIENT_ERROR_MESSAGE = "An error occurred while searching. Please try again."
SUBMIT_ERROR_MESSAGE = "Failed to submit complaint. Please try again."


# Unknown keys render verbatim
def category_label(value: str) -> str:
    return CATEGORY_LABELS.get(value, value)


def location_label(value: str) -> str:
    return LOCATION_LABELS.get(value, value)


def status_label(value: str) -> str:
    return STATUS_LABELS.get(value, value)


def status_description(value: str) -> str:
    return STATUS_DESCRIPTIONS.get(value, "")


# --- Submission form ---

@dataclass
class SubmitForm:
    title: str = ""
    description: str = ""
    category: str = ""
    location: str = ""
    submitting: bool = False

    @property
    def can_submit(self) -> bool:
        return (
            not self.submitting
            and all((self.title, self.description, self.category, self.location))
        )

    def payload(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "location": self.location,
        }

    def reset(self) -> None:
        self.title = self.description = self.category = self.location = ""
        self.submitting = False


@dataclass
class SubmissionView:
    tracking_code: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.tracking_code is not None


def submission_view(status_code: int, body: Any) -> SubmissionView:
    if status_code == 201 and isinstance(body, dict) and body.get("complaintId"):
        return SubmissionView(tracking_code=body["complaintId"])
    error = body.get("error") if isinstance(body, dict) else None
    return SubmissionView(error=error or SUBMIT_ERROR_MESSAGE)


# --- Tracking lookup ---

@dataclass
class TrackingView:
    kind: str  # loading | found | not_found | error
    complaint: Optional[Dict[str, Any]] = None
    message: Optional[str] = None

    @classmethod
    def loading(cls) -> "TrackingView":
        return cls(kind="loading")

    @property
    def status_label(self) -> Optional[str]:
        return status_label(self.complaint["status"]) if self.complaint else None

    @property
    def category_label(self) -> Optional[str]:
        return category_label(self.complaint["category"]) if self.complaint else None

    @property
    def location_label(self) -> Optional[str]:
        return location_label(self.complaint["location"]) if self.complaint else None


def tracking_view(status_code: int, body: Any) -> TrackingView:
    if status_code == 200 and isinstance(body, dict):
        return TrackingView(kind="found", complaint=body)
    if status_code == 404:
        return TrackingView(kind="not_found", message=NOT_FOUND_MESSAGE)
    return TrackingView(kind="error", message=TRANSIENT_ERROR_MESSAGE)


def tracking_code_from_query(query_string: str) -> Optional[str]:
    """Tracking code passed as ``?id=CV-...`` when following a shared link."""
    values = parse_qs(query_string.lstrip("?")).get("id")
    if not values or not values[0].strip():
        return None
    return values[0].strip()


# --- Admin dashboard ---

@dataclass
class EditDialog:
    complaint: Optional[Dict[str, Any]] = None
    status: str = ""
    admin_notes: str = ""

    @property
    def is_open(self) -> bool:
        return self.complaint is not None

    def open(self, complaint: Dict[str, Any]) -> None:
        self.complaint = complaint
        self.status = complaint["status"]
        self.admin_notes = complaint.get("admin_notes") or ""

    def close(self) -> None:
        self.complaint = None
        self.status = ""
        self.admin_notes = ""

    def patch_body(self) -> Dict[str, str]:
        return {"status": self.status, "admin_notes": self.admin_notes}


@dataclass
class DashboardView:
    user: Optional[Dict[str, Any]] = None
    status_filter: str = "all"
    category_filter: str = "all"
    complaints: List[Dict[str, Any]] = field(default_factory=list)
    stats: Dict[str, int] = field(
        default_factory=lambda: {"total": 0, "pending": 0, "inProgress": 0, "resolved": 0}
    )
    dialog: EditDialog = field(default_factory=EditDialog)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def query_params(self) -> Dict[str, str]:
        params = {}
        if self.status_filter != "all":
            params["status"] = self.status_filter
        if self.category_filter != "all":
            params["category"] = self.category_filter
        return params

    def stat_tiles(self) -> List[tuple]:
        return [
            ("Total", self.stats.get("total", 0)),
            ("Pending", self.stats.get("pending", 0)),
            ("In Progress", self.stats.get("inProgress", 0)),
            ("Resolved", self.stats.get("resolved", 0)),
        ]

    # Failed admin fetches keep the previous state; admin is low-volume
    def apply_list_response(self, status_code: int, body: Any) -> None:
        if status_code != 200 or not isinstance(body, list):
            logger.warning("Failed to fetch complaints: HTTP %s", status_code)
            return
        self.complaints = body

    def apply_stats_response(self, status_code: int, body: Any) -> None:
        if status_code != 200 or not isinstance(body, dict):
            logger.warning("Failed to fetch stats: HTTP %s", status_code)
            return
        self.stats = body
