from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from campusvoice.core.database import get_session
from campusvoice.core.errors import InvalidStatus
from campusvoice.models.complaints import VALID_STATUSES
from campusvoice.schemas.complaints import AdminStats, ComplaintAdminRead, ComplaintUpdate
from campusvoice.services.complaint_store import UNSET, ComplaintStore
from campusvoice.utils.security import admin_required

# Every route here needs a valid admin session
router = APIRouter(tags=["Admin"], dependencies=[Depends(admin_required)])


# List complaints, optionally filtered; "all" means no filter
@router.get("/complaints", response_model=List[ComplaintAdminRead])
def list_complaints(
    status: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    session: Session = Depends(get_session),
):
    return ComplaintStore(session).list(status=status, category=category)


# Update status and/or admin notes
@router.patch("/complaints/{complaint_pk}")
def update_complaint(
    complaint_pk: int,
    payload: ComplaintUpdate,
    session: Session = Depends(get_session),
):
    fields = payload.model_fields_set

    if payload.status and payload.status not in VALID_STATUSES:
        raise InvalidStatus()

    ComplaintStore(session).update_by_id(
        complaint_pk,
        status=payload.status if "status" in fields else UNSET,
        admin_notes=payload.admin_notes if "admin_notes" in fields else UNSET,
    )
    return {"success": True}


# Dashboard counters
@router.get("/stats", response_model=AdminStats)
def get_stats(session: Session = Depends(get_session)):
    return ComplaintStore(session).stats()
