from datetime import datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field
import enum


def utcnow() -> datetime:
    # Naive UTC; SQLite drops tzinfo on the way back anyway
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ComplaintStatus(str, enum.Enum):
    pending = "pending"           # Submitted, not reviewed yet
    in_progress = "in-progress"   # Administration is working on it
    resolved = "resolved"         # Action taken / closed


class ComplaintCategory(str, enum.Enum):
    infrastructure = "infrastructure"
    technology = "technology"
    utilities = "utilities"
    safety = "safety"
    sanitation = "sanitation"
    other = "other"


class ComplaintLocation(str, enum.Enum):
    main_building = "main-building"
    library = "library"
    science_block = "science-block"
    cafeteria = "cafeteria"
    sports_complex = "sports-complex"
    dormitory = "dormitory"
    parking = "parking"
    outdoor = "outdoor"
    other = "other"


VALID_STATUSES = {s.value for s in ComplaintStatus}


class Complaint(SQLModel, table=True):
    __tablename__ = "complaints"

    id: Optional[int] = Field(default=None, primary_key=True)
    complaint_id: str = Field(index=True, unique=True, nullable=False)  # public tracking code
    title: str = Field(nullable=False)
    description: str = Field(nullable=False)
    # category/location are stored as given; unknown values are not rejected
    category: str = Field(index=True, nullable=False)
    location: str = Field(nullable=False)
    status: str = Field(default=ComplaintStatus.pending.value, index=True, nullable=False)
    admin_notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
