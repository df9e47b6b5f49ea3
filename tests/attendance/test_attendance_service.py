from __future__ import annotations

import pytest

from office_presence.attendance.model import CLEAR, KEEP, field_update_from_json
from office_presence.core.enums import EntryStatus, Role
from office_presence.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from office_presence.users.model import Actor

from conftest import ALICE_ID, BOB_ID, CAROL_ID


@pytest.fixture()
def service(container):
    return container.attendance_service


def test_set_status_creates_entry_with_details(service, alice, entries_repo):
    entry = service.set_status(
        actor=alice,
        date="2026-02-02",
        status="office",
        note="Team sync",
        start_time="09:00",
        end_time="17:00",
    )

    assert entry.user_id == ALICE_ID
    assert entry.status == EntryStatus.OFFICE
    assert entries_repo.find_one(user_id=ALICE_ID, date="2026-02-02") == entry
    assert entry.to_dict()["startTime"] == "09:00"


def test_upsert_replaces_existing_entry(service, alice, entries_repo):
    service.set_status(actor=alice, date="2026-02-02", status="office")
    service.set_status(actor=alice, date="2026-02-02", status="leave")

    assert len(entries_repo.rows) == 1
    assert entries_repo.find_one(user_id=ALICE_ID, date="2026-02-02").status == EntryStatus.LEAVE


def test_keep_preserves_and_clear_removes_note(service, alice):
    service.set_status(actor=alice, date="2026-02-02", status="leave", note="Dentist")

    kept = service.set_status(actor=alice, date="2026-02-02", status="office", note=KEEP)
    assert kept.note == "Dentist"

    cleared = service.set_status(actor=alice, date="2026-02-02", status="office", note=CLEAR)
    assert cleared.note is None


def test_clearing_start_clears_whole_window(service, alice):
    service.set_status(actor=alice, date="2026-02-02", status="office", start_time="09:00", end_time="12:00")

    entry = service.set_status(actor=alice, date="2026-02-02", status="office", start_time=CLEAR)

    assert entry.start_time is None
    assert entry.end_time is None


def test_clearing_only_end_is_rejected(service, alice):
    service.set_status(actor=alice, date="2026-02-02", status="office", start_time="09:00", end_time="12:00")

    with pytest.raises(ValidationError, match="Both startTime and endTime"):
        service.set_status(actor=alice, date="2026-02-02", status="office", end_time=CLEAR)


def test_note_is_sanitized_and_limited(service, alice):
    entry = service.set_status(actor=alice, date="2026-02-02", status="office", note="<i>Client</i> visit")
    assert entry.note == "Client visit"

    with pytest.raises(ValidationError, match="Note cannot exceed 500 characters"):
        service.set_status(actor=alice, date="2026-02-02", status="office", note="a" * 501)


def test_markup_only_note_is_stored_as_empty(service, alice):
    entry = service.set_status(actor=alice, date="2026-02-02", status="office", note="<b></b>")
    assert entry.note is None


@pytest.mark.parametrize("status", ["wfh", "OFFICE", "", None])
def test_invalid_status(service, alice, status):
    with pytest.raises(ValidationError, match="Status must be"):
        service.set_status(actor=alice, date="2026-02-02", status=status)


def test_invalid_time_window(service, alice):
    with pytest.raises(ValidationError, match="endTime must be after startTime"):
        service.set_status(actor=alice, date="2026-02-02", status="office", start_time="12:00", end_time="09:00")


def test_member_cannot_edit_past(service, alice):
    with pytest.raises(AuthorizationError, match="Cannot modify past dates"):
        service.set_status(actor=alice, date="2026-01-30", status="office")


def test_member_cannot_edit_beyond_window(service, alice):
    with pytest.raises(AuthorizationError, match="within 90 days"):
        service.set_status(actor=alice, date="2026-05-04", status="office")


def test_weekend_and_holiday_are_rejected(service, alice, admin):
    with pytest.raises(ValidationError, match="weekend"):
        service.set_status(actor=alice, date="2026-02-07", status="office")
    with pytest.raises(ValidationError, match="holiday"):
        service.admin_set_status(actor=admin, target_user_id=BOB_ID, date="2026-02-05", status="office")


def test_admin_can_edit_any_date_for_others(service, admin, entries_repo):
    entry = service.admin_set_status(actor=admin, target_user_id=BOB_ID, date="2025-06-02", status="leave")

    assert entry.user_id == BOB_ID
    assert entries_repo.find_one(user_id=BOB_ID, date="2025-06-02") is not None


def test_admin_set_status_requires_admin(service, alice):
    with pytest.raises(AuthorizationError):
        service.admin_set_status(actor=alice, target_user_id=BOB_ID, date="2026-02-02", status="office")


def test_admin_set_status_rejects_inactive_target(service, admin):
    with pytest.raises(NotFoundError, match="User not found"):
        service.admin_set_status(actor=admin, target_user_id=CAROL_ID, date="2026-02-02", status="office")


def test_revert_reports_whether_entry_existed(service, alice):
    service.set_status(actor=alice, date="2026-02-02", status="leave")

    assert service.revert_to_wfh(actor=alice, date="2026-02-02") == {
        "existed": True,
        "message": "Entry removed (status reverted to WFH)",
    }
    assert service.revert_to_wfh(actor=alice, date="2026-02-02")["message"] == "No entry found"


def test_member_revert_respects_window(service, alice, entries_repo):
    entries_repo.seed(ALICE_ID, "2026-01-28", EntryStatus.OFFICE)

    with pytest.raises(AuthorizationError):
        service.revert_to_wfh(actor=alice, date="2026-01-28")
    assert entries_repo.find_one(user_id=ALICE_ID, date="2026-01-28") is not None


def test_admin_revert(service, admin, entries_repo):
    entries_repo.seed(BOB_ID, "2026-01-28", EntryStatus.OFFICE)

    result = service.admin_revert(actor=admin, target_user_id=BOB_ID, date="2026-01-28")

    assert result["existed"] is True
    assert entries_repo.find_one(user_id=BOB_ID, date="2026-01-28") is None


def test_admin_revert_requires_admin(service):
    with pytest.raises(AuthorizationError):
        service.admin_revert(actor=Actor(user_id=BOB_ID, role=Role.MEMBER), target_user_id=ALICE_ID, date="2026-02-02")


def test_list_entries_ordered_and_bounded(service, entries_repo):
    entries_repo.seed(ALICE_ID, "2026-02-04", EntryStatus.OFFICE)
    entries_repo.seed(ALICE_ID, "2026-02-02", EntryStatus.LEAVE)
    entries_repo.seed(ALICE_ID, "2026-03-02", EntryStatus.OFFICE)
    entries_repo.seed(BOB_ID, "2026-02-03", EntryStatus.OFFICE)

    entries = service.list_entries(user_id=ALICE_ID, start_date="2026-02-01", end_date="2026-02-28")

    assert [e.date for e in entries] == ["2026-02-02", "2026-02-04"]


def test_list_entries_rejects_reversed_range(service):
    with pytest.raises(ValidationError, match="endDate must be >= startDate"):
        service.list_entries(user_id=ALICE_ID, start_date="2026-02-10", end_date="2026-02-01")


def test_field_update_from_json():
    assert field_update_from_json({}, "note") is KEEP
    assert field_update_from_json({"note": None}, "note") is CLEAR
    assert field_update_from_json({"note": ""}, "note") is CLEAR
    assert field_update_from_json({"note": "hi"}, "note") == "hi"
    with pytest.raises(ValidationError):
        field_update_from_json({"note": 5}, "note")
