"""
Complaint Store
===============

Persistence for the single ``complaints`` table. Routes never touch the
session directly; they go through ComplaintStore so validation, the
tracking-code retry loop and datastore error mapping live in one place.
"""

import logging
from datetime import timedelta
from typing import Callable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from campusvoice.core.config import COMPLAINT_ID_MAX_ATTEMPTS
from campusvoice.core.errors import (
    GenerationExhausted,
    InvalidStatus,
    NotFound,
    StoreError,
    ValidationError,
)
from campusvoice.models.complaints import Complaint, ComplaintStatus, VALID_STATUSES, utcnow
from campusvoice.schemas.complaints import AdminStats
from campusvoice.utils.tracking import generate_complaint_id, normalize_complaint_id

logger = logging.getLogger(__name__)

NO_FILTER = ("", "all")


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


def _is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


class ComplaintStore:
    def __init__(
        self,
        session: Session,
        id_factory: Callable[[], str] = generate_complaint_id,
        max_attempts: int = COMPLAINT_ID_MAX_ATTEMPTS,
    ):
        self.session = session
        self.id_factory = id_factory
        self.max_attempts = max(1, max_attempts)

    def create(self, title: str, description: str, category: str, location: str) -> str:
        """Insert a new pending complaint and return its tracking code.

        Raises ValidationError if any field is missing or blank, and
        GenerationExhausted if every generated code collided.
        """
        if any(_is_blank(v) for v in (title, description, category, location)):
            raise ValidationError("All fields are required")

        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            code = self.id_factory()
            now = utcnow()
            complaint = Complaint(
                complaint_id=code,
                title=title,
                description=description,
                category=category,
                location=location,
                status=ComplaintStatus.pending.value,
                admin_notes=None,
                created_at=now,
                updated_at=now,
            )
            try:
                self.session.add(complaint)
                self.session.commit()
            except IntegrityError as e:
                self.session.rollback()
                logger.warning(
                    "Tracking code collision on %s (attempt %d/%d)",
                    code, attempt, self.max_attempts,
                )
                last_error = e
                continue
            except SQLAlchemyError as e:
                self.session.rollback()
                raise StoreError(detail=f"insert failed: {e}") from e

            logger.info("Complaint %s submitted", code)
            return code

        raise GenerationExhausted(
            detail=f"{self.max_attempts} tracking code collisions in a row"
        ) from last_error

    def get_by_tracking_id(self, code: str) -> Optional[Complaint]:
        try:
            return self.session.exec(
                select(Complaint).where(Complaint.complaint_id == normalize_complaint_id(code))
            ).first()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(detail=f"lookup failed: {e}") from e

    def list(self, status: Optional[str] = None, category: Optional[str] = None) -> List[Complaint]:
        """All complaints matching the optional filters, newest first."""
        statement = select(Complaint)
        if status is not None and status not in NO_FILTER:
            statement = statement.where(Complaint.status == status)
        if category is not None and category not in NO_FILTER:
            statement = statement.where(Complaint.category == category)
        statement = statement.order_by(Complaint.created_at.desc(), Complaint.id.desc())

        try:
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(detail=f"list failed: {e}") from e

    def update_by_id(self, complaint_pk: int, status=UNSET, admin_notes=UNSET) -> Complaint:
        """Update status and/or notes of one complaint.

        A status of None or "" is treated as not given. admin_notes, when
        given at all (even "" or None), overwrites the stored value.
        updated_at is refreshed on every call.
        """
        if status is not UNSET and status not in (None, "") and status not in VALID_STATUSES:
            raise InvalidStatus()

        try:
            complaint = self.session.get(Complaint, complaint_pk)
            if complaint is None:
                raise NotFound("Complaint not found")

            if status is not UNSET and status not in (None, ""):
                complaint.status = status
            if admin_notes is not UNSET:
                complaint.admin_notes = admin_notes

            now = utcnow()
            # updated_at never moves backwards, even if the clock does
            if now <= complaint.updated_at:
                now = complaint.updated_at + timedelta(microseconds=1)
            complaint.updated_at = now

            self.session.add(complaint)
            self.session.commit()
            self.session.refresh(complaint)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(detail=f"update of {complaint_pk} failed: {e}") from e

        logger.info("Complaint %s updated (status=%s)", complaint.complaint_id, complaint.status)
        return complaint

    def stats(self) -> AdminStats:
        def count(*conditions) -> int:
            statement = select(func.count()).select_from(Complaint)
            for condition in conditions:
                statement = statement.where(condition)
            return self.session.exec(statement).one()

        try:
            return AdminStats(
                total=count(),
                pending=count(Complaint.status == ComplaintStatus.pending.value),
                in_progress=count(Complaint.status == ComplaintStatus.in_progress.value),
                resolved=count(Complaint.status == ComplaintStatus.resolved.value),
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(detail=f"stats failed: {e}") from e
