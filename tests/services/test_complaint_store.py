import re

import pytest
from sqlalchemy.exc import OperationalError

from campusvoice.core.errors import (
    GenerationExhausted,
    InvalidStatus,
    NotFound,
    StoreError,
    ValidationError,
)
from campusvoice.models.complaints import Complaint
from campusvoice.services.complaint_store import ComplaintStore


def _create(store, **overrides):
    fields = {
        "title": "Leaking tap",
        "description": "Second floor washroom tap leaks all night.",
        "category": "utilities",
        "location": "library",
    }
    fields.update(overrides)
    return store.create(**fields)


def test_create_returns_tracking_code_and_pending_record(session):
    store = ComplaintStore(session)

    code = _create(store)

    assert re.fullmatch(r"CV-[0-9A-Z]+", code)
    complaint = store.get_by_tracking_id(code)
    assert complaint.status == "pending"
    assert complaint.admin_notes is None
    assert complaint.created_at == complaint.updated_at


@pytest.mark.parametrize("field", ["title", "description", "category", "location"])
@pytest.mark.parametrize("value", [None, "", "   "])
def test_create_rejects_missing_fields(session, field, value):
    store = ComplaintStore(session)

    with pytest.raises(ValidationError):
        _create(store, **{field: value})

    assert store.stats().total == 0


def test_create_keeps_unknown_category_and_location(session):
    store = ComplaintStore(session)

    code = _create(store, category="parking-permits", location="north-annex")

    complaint = store.get_by_tracking_id(code)
    assert complaint.category == "parking-permits"
    assert complaint.location == "north-annex"


def test_create_retries_on_tracking_code_collision(session):
    _create(ComplaintStore(session, id_factory=lambda: "CV-TAKEN"))
    codes = iter(["CV-TAKEN", "CV-TAKEN", "CV-FRESH"])
    store = ComplaintStore(session, id_factory=lambda: next(codes))

    code = _create(store)

    assert code == "CV-FRESH"
    assert store.stats().total == 2


def test_create_gives_up_after_max_attempts(session):
    _create(ComplaintStore(session, id_factory=lambda: "CV-TAKEN"))
    calls = []

    def factory():
        calls.append(1)
        return "CV-TAKEN"

    store = ComplaintStore(session, id_factory=factory, max_attempts=3)

    with pytest.raises(GenerationExhausted):
        _create(store)
    assert len(calls) == 3
    assert store.stats().total == 1


def test_get_by_tracking_id_is_case_insensitive(session):
    store = ComplaintStore(session, id_factory=lambda: "CV-ABC123XYZ")
    _create(store)

    assert store.get_by_tracking_id("cv-abc123xyz").complaint_id == "CV-ABC123XYZ"
    assert store.get_by_tracking_id("  Cv-Abc123Xyz ").complaint_id == "CV-ABC123XYZ"


def test_get_by_tracking_id_missing_returns_none(session):
    assert ComplaintStore(session).get_by_tracking_id("CV-DOESNOTEXIST") is None


def test_list_filters_and_orders_newest_first(session):
    store = ComplaintStore(session)
    codes = [
        _create(store, category="safety"),
        _create(store, category="safety"),
        _create(store, category="sanitation"),
        _create(store, category="safety"),
    ]
    for code in (codes[0], codes[2], codes[3]):
        store.update_by_id(store.get_by_tracking_id(code).id, status="resolved")

    result = store.list(status="resolved", category="safety")

    assert [c.complaint_id for c in result] == [codes[3], codes[0]]
    assert len(store.list()) == 4
    assert len(store.list(status="all", category="all")) == 4
    assert len(store.list(status="", category="safety")) == 3


def test_update_sets_status_and_notes(session):
    store = ComplaintStore(session)
    complaint = store.get_by_tracking_id(_create(store))

    updated = store.update_by_id(complaint.id, status="resolved", admin_notes="Fixed")

    assert updated.status == "resolved"
    assert updated.admin_notes == "Fixed"
    assert updated.updated_at > updated.created_at


def test_update_any_status_to_any_other(session):
    store = ComplaintStore(session)
    pk = store.get_by_tracking_id(_create(store)).id

    for status in ("resolved", "pending", "in-progress", "pending"):
        assert store.update_by_id(pk, status=status).status == status


def test_update_notes_only_keeps_status(session):
    store = ComplaintStore(session)
    pk = store.get_by_tracking_id(_create(store)).id
    store.update_by_id(pk, status="in-progress", admin_notes="Looking into it")

    updated = store.update_by_id(pk, admin_notes="")

    assert updated.status == "in-progress"
    assert updated.admin_notes == ""


def test_noop_update_still_refreshes_updated_at(session):
    store = ComplaintStore(session)
    complaint = store.get_by_tracking_id(_create(store))
    before = complaint.updated_at

    updated = store.update_by_id(complaint.id)

    assert updated.updated_at > before
    assert updated.status == "pending"


def test_update_invalid_status_leaves_record_unchanged(session):
    store = ComplaintStore(session)
    complaint = store.get_by_tracking_id(_create(store))
    before = complaint.updated_at

    with pytest.raises(InvalidStatus):
        store.update_by_id(complaint.id, status="bogus")

    session.expire_all()
    reloaded = session.get(Complaint, complaint.id)
    assert reloaded.status == "pending"
    assert reloaded.updated_at == before


def test_update_unknown_id_raises_not_found(session):
    with pytest.raises(NotFound):
        ComplaintStore(session).update_by_id(9999, status="resolved")


def test_stats_counts_each_status(session):
    store = ComplaintStore(session)
    pks = [store.get_by_tracking_id(_create(store)).id for _ in range(5)]
    store.update_by_id(pks[0], status="in-progress")
    store.update_by_id(pks[1], status="resolved")
    store.update_by_id(pks[2], status="resolved")

    stats = store.stats()

    assert (stats.total, stats.pending, stats.in_progress, stats.resolved) == (5, 2, 1, 2)
    assert stats.total == len(store.list())


class BrokenSession:
    def __init__(self):
        self.rollbacks = 0

    def exec(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    def rollback(self):
        self.rollbacks += 1


def test_datastore_failures_become_store_errors():
    store = ComplaintStore(BrokenSession())

    with pytest.raises(StoreError):
        store.list()
    with pytest.raises(StoreError):
        store.get_by_tracking_id("CV-ANY")
    with pytest.raises(StoreError):
        store.stats()


def test_failed_reads_roll_back_session():
    broken = BrokenSession()
    store = ComplaintStore(broken)

    for read in (store.list, lambda: store.get_by_tracking_id("CV-ANY"), store.stats):
        with pytest.raises(StoreError):
            read()

    assert broken.rollbacks == 3


def test_default_factory_codes_are_unique_in_practice(session):
    store = ComplaintStore(session)
    codes = {_create(store) for _ in range(20)}
    assert len(codes) == 20
