from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field


# Request schema for submitting a complaint.
# Fields are untyped so that missing, blank and non-string values all reach
# the store's validation and come back as "All fields are required".
class ComplaintCreate(BaseModel):
    title: Any = None
    description: Any = None
    category: Any = None
    location: Any = None


# Request schema for the admin update; presence matters, see model_fields_set
class ComplaintUpdate(BaseModel):
    status: Optional[str] = None
    admin_notes: Optional[str] = None


# Public tracking response (no surrogate key)
class ComplaintRead(BaseModel):
    complaint_id: str
    title: str
    description: str
    category: str
    location: str
    status: str
    admin_notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True  # allows reading from ORM objects


# Admin list response
class ComplaintAdminRead(ComplaintRead):
    id: int


class AdminStats(BaseModel):
    total: int = 0
    pending: int = 0
    in_progress: int = Field(default=0, alias="inProgress")
    resolved: int = 0

    class Config:
        populate_by_name = True
