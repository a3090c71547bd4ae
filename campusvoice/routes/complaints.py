from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from campusvoice.core.database import get_session
from campusvoice.core.errors import NotFound
from campusvoice.schemas.complaints import ComplaintCreate, ComplaintRead
from campusvoice.services.complaint_store import ComplaintStore

# Public, unauthenticated: reporters stay anonymous
router = APIRouter(tags=["Complaints"])


@router.post("/complaints", status_code=status.HTTP_201_CREATED)
def create_complaint(
    payload: ComplaintCreate,
    session: Session = Depends(get_session),
):
    complaint_id = ComplaintStore(session).create(
        title=payload.title,
        description=payload.description,
        category=payload.category,
        location=payload.location,
    )
    return {"complaintId": complaint_id}


@router.get("/complaints/{complaint_id}", response_model=ComplaintRead)
def track_complaint(
    complaint_id: str,
    session: Session = Depends(get_session),
):
    """
    Look up a complaint by its tracking code (case-insensitive).
    """
    complaint = ComplaintStore(session).get_by_tracking_id(complaint_id)
    if not complaint:
        raise NotFound("Complaint not found")

    return complaint
