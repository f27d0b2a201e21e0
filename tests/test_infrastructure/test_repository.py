"""
Tests for the generic repositories and the single-active invariant
"""
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from app.infrastructure.db.models import TimeEntry
from app.infrastructure.store.repository import (
    ActivityRepository,
    CategoryRepository,
    TimeEntryRepository,
    UserRepository,
)

FIXED_NOW = datetime(2026, 3, 18, 14, 30)


def _category(db, name="Programming"):
    return CategoryRepository(db).create(name=name, icon="ri-code-line", color="#6D28D9")


def _activity(db, category, name="React Course"):
    return ActivityRepository(db).create(name=name, category_id=category.id)


def _active_count(db) -> int:
    return sum(1 for e in TimeEntryRepository(db).list_all() if e.active)


# ---------------------------------------------------------------------------
# Generic CRUD
# ---------------------------------------------------------------------------

class TestCrud:
    def test_ids_are_sequential(self, db_session):
        repo = CategoryRepository(db_session)
        ids = [repo.create(name=f"c{i}", icon="i", color="#000000").id for i in range(3)]
        assert ids == sorted(ids)
        assert ids[1] == ids[0] + 1
        assert ids[2] == ids[1] + 1

    def test_ids_never_reused_after_delete(self, db_session):
        repo = CategoryRepository(db_session)
        first = repo.create(name="a", icon="i", color="#000000")
        second = repo.create(name="b", icon="i", color="#000000")
        assert repo.delete(second.id) is True

        third = repo.create(name="c", icon="i", color="#000000")
        assert third.id > second.id > first.id

    def test_default_color(self, db_session):
        category = CategoryRepository(db_session).create(name="Reading", icon="ri-book-open-line")
        assert category.color == "#6D28D9"

    def test_get_missing_returns_none(self, db_session):
        assert CategoryRepository(db_session).get(9999) is None

    def test_update_merges_fields(self, db_session):
        category = _category(db_session)
        updated = CategoryRepository(db_session).update(category.id, {"name": "Coding"})
        assert updated.name == "Coding"
        assert updated.icon == "ri-code-line"
        assert updated.color == "#6D28D9"

    def test_update_missing_returns_none(self, db_session):
        assert CategoryRepository(db_session).update(9999, {"name": "x"}) is None

    def test_delete_missing_returns_false(self, db_session):
        assert CategoryRepository(db_session).delete(9999) is False

    def test_list_all_in_insertion_order(self, db_session):
        a = _category(db_session, "A")
        b = _category(db_session, "B")
        assert [c.id for c in CategoryRepository(db_session).list_all()] == [a.id, b.id]

    def test_list_by_category(self, db_session):
        c1 = _category(db_session, "A")
        c2 = _category(db_session, "B")
        a1 = _activity(db_session, c1, "one")
        _activity(db_session, c2, "two")
        a3 = _activity(db_session, c1, "three")

        found = ActivityRepository(db_session).list_by_category(c1.id)
        assert [a.id for a in found] == [a1.id, a3.id]

    def test_user_by_username(self, db_session):
        repo = UserRepository(db_session)
        user = repo.create(username="alice", password_hash="x")
        assert repo.get_by_username("alice").id == user.id
        assert repo.get_by_username("bob") is None

    def test_exists_any(self, db_session):
        repo = CategoryRepository(db_session)
        assert repo.exists_any() is False
        _category(db_session)
        assert repo.exists_any() is True


# ---------------------------------------------------------------------------
# Time entries
# ---------------------------------------------------------------------------

class TestTimeEntryQueries:
    def test_date_range_is_inclusive(self, db_session):
        activity = _activity(db_session, _category(db_session))
        repo = TimeEntryRepository(db_session)
        start = datetime(2026, 3, 18, 9, 0)
        end = datetime(2026, 3, 18, 17, 0)
        at_start = repo.create(activity_id=activity.id, start_time=start)
        at_end = repo.create(activity_id=activity.id, start_time=end)
        repo.create(activity_id=activity.id, start_time=end + timedelta(seconds=1))
        repo.create(activity_id=activity.id, start_time=start - timedelta(seconds=1))

        found = repo.list_by_date_range(start, end)
        assert {e.id for e in found} == {at_start.id, at_end.id}

    def test_list_by_activity(self, db_session):
        category = _category(db_session)
        a1 = _activity(db_session, category, "one")
        a2 = _activity(db_session, category, "two")
        repo = TimeEntryRepository(db_session)
        e1 = repo.create(activity_id=a1.id, start_time=FIXED_NOW)
        repo.create(activity_id=a2.id, start_time=FIXED_NOW)

        assert [e.id for e in repo.list_by_activity(a1.id)] == [e1.id]


class TestSingleActiveInvariant:
    def test_get_active_none_initially(self, db_session):
        assert TimeEntryRepository(db_session).get_active() is None

    def test_create_active(self, db_session):
        activity = _activity(db_session, _category(db_session))
        repo = TimeEntryRepository(db_session)
        entry = repo.create(activity_id=activity.id, start_time=FIXED_NOW, active=True)
        assert entry.active is True
        assert repo.get_active().id == entry.id

    def test_create_active_stops_previous(self, db_session, clock):
        category = _category(db_session)
        a1 = _activity(db_session, category, "one")
        a2 = _activity(db_session, category, "two")
        repo = TimeEntryRepository(db_session)

        first = repo.create(activity_id=a1.id, start_time=FIXED_NOW - timedelta(hours=1), active=True)
        second = repo.create(activity_id=a2.id, start_time=FIXED_NOW, active=True)

        assert second.active is True
        assert first.active is False
        assert first.end_time == clock()
        assert repo.get_active().id == second.id
        assert _active_count(db_session) == 1

    def test_update_activation_stops_previous(self, db_session):
        activity = _activity(db_session, _category(db_session))
        repo = TimeEntryRepository(db_session)
        running = repo.create(activity_id=activity.id, start_time=FIXED_NOW, active=True)
        paused = repo.create(
            activity_id=activity.id,
            start_time=FIXED_NOW - timedelta(hours=3),
            end_time=FIXED_NOW - timedelta(hours=2),
        )

        repo.update(paused.id, {"active": True})

        assert paused.active is True
        assert paused.end_time is None
        assert running.active is False
        assert running.end_time is not None
        assert _active_count(db_session) == 1

    def test_update_of_already_active_entry_keeps_it_active(self, db_session):
        activity = _activity(db_session, _category(db_session))
        repo = TimeEntryRepository(db_session)
        entry = repo.create(activity_id=activity.id, start_time=FIXED_NOW, active=True)

        repo.update(entry.id, {"active": True, "note": "still going"})

        assert entry.active is True
        assert entry.note == "still going"
        assert _active_count(db_session) == 1

    def test_invariant_over_mixed_sequence(self, db_session):
        activity = _activity(db_session, _category(db_session))
        repo = TimeEntryRepository(db_session)
        created = []
        for i in range(5):
            entry = repo.create(
                activity_id=activity.id,
                start_time=FIXED_NOW - timedelta(hours=5 - i),
                active=(i % 2 == 0),
            )
            created.append(entry)
            assert _active_count(db_session) <= 1
        for entry in created:
            repo.update(entry.id, {"active": True})
            assert _active_count(db_session) == 1
        repo.stop_active()
        assert _active_count(db_session) == 0

    def test_deactivating_running_entry_closes_it(self, db_session, clock):
        activity = _activity(db_session, _category(db_session))
        repo = TimeEntryRepository(db_session)
        entry = repo.create(activity_id=activity.id, start_time=FIXED_NOW, active=True)
        clock.advance(minutes=20)

        repo.update(entry.id, {"active": False})

        assert entry.active is False
        assert entry.end_time == FIXED_NOW + timedelta(minutes=20)
        assert repo.get_active() is None

    def test_deactivating_keeps_supplied_end_time(self, db_session):
        activity = _activity(db_session, _category(db_session))
        repo = TimeEntryRepository(db_session)
        entry = repo.create(activity_id=activity.id, start_time=FIXED_NOW, active=True)
        end = FIXED_NOW + timedelta(minutes=5)

        repo.update(entry.id, {"active": False, "end_time": end})

        assert entry.active is False
        assert entry.end_time == end

    def test_deactivating_closed_entry_changes_nothing(self, db_session):
        activity = _activity(db_session, _category(db_session))
        repo = TimeEntryRepository(db_session)
        entry = repo.create(
            activity_id=activity.id,
            start_time=FIXED_NOW - timedelta(hours=1),
            end_time=FIXED_NOW,
        )

        repo.update(entry.id, {"active": False})

        assert entry.active is False
        assert entry.end_time == FIXED_NOW

    def test_stop_active_closes_entry(self, db_session, clock):
        activity = _activity(db_session, _category(db_session))
        repo = TimeEntryRepository(db_session)
        entry = repo.create(activity_id=activity.id, start_time=FIXED_NOW, active=True)
        clock.advance(minutes=25)

        stopped = repo.stop_active()

        assert stopped.id == entry.id
        assert stopped.active is False
        assert stopped.end_time == FIXED_NOW + timedelta(minutes=25)
        assert repo.get_active() is None

    def test_stop_without_active_is_noop(self, db_session):
        activity = _activity(db_session, _category(db_session))
        repo = TimeEntryRepository(db_session)
        closed = repo.create(
            activity_id=activity.id,
            start_time=FIXED_NOW - timedelta(hours=1),
            end_time=FIXED_NOW,
        )

        assert repo.stop_active() is None
        assert repo.stop_active() is None
        assert closed.end_time == FIXED_NOW
        assert not db_session.dirty

    def test_database_rejects_second_active_row(self, db_session):
        activity = _activity(db_session, _category(db_session))
        TimeEntryRepository(db_session).create(activity_id=activity.id, start_time=FIXED_NOW, active=True)

        db_session.add(TimeEntry(activity_id=activity.id, start_time=FIXED_NOW, active=True))
        with pytest.raises(IntegrityError):
            db_session.flush()
        db_session.rollback()
