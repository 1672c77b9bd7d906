from datetime import datetime, timezone

import pytest

from room_monitor.attendance.memory_repository import InMemoryRoomEntryRepository
from room_monitor.attendance.normalizer import RecordNormalizer
from room_monitor.attendance.service import RoomEntryService
from room_monitor.core.enums import ScheduleStatus
from room_monitor.core.exceptions import MalformedRecordError


def test_entry_variants_map_to_same_record():
    n = RecordNormalizer()
    shapes = [
        {"id": 1, "user_id": 7, "room_id": 100, "startedAt": "2024-01-08T14:05:00Z", "endedAt": "2024-01-08T21:30:00Z"},
        {"id": 1, "user": 7, "roomId": 100, "entry_time": "2024-01-08T09:05:00-05:00", "exit_time": "2024-01-08T16:30:00-05:00"},
        {"id": "1", "userId": {"id": 7}, "room": "100", "created_at": "2024-01-08T09:05:00", "ended_at": "2024-01-08T16:30:00"},
    ]

    entries = [n.entry(raw) for raw in shapes]

    assert entries[0] == entries[1] == entries[2]
    assert entries[0].started_at == datetime(2024, 1, 8, 14, 5, tzinfo=timezone.utc)


def test_entry_room_name_in_room_key():
    entry = RecordNormalizer().entry(
        {"user_id": 7, "room": "Lab 1", "roomId": 100, "startedAt": "2024-01-08T14:05:00Z"}
    )

    assert entry.room_id == 100
    assert entry.room_name == "Lab 1"
    assert entry.entry_id == 0
    assert entry.is_open


def test_entry_ending_before_start_is_malformed():
    with pytest.raises(MalformedRecordError) as err:
        RecordNormalizer().entry(
            {"id": 3, "user_id": 7, "room_id": 100, "startedAt": "2024-01-08T14:05:00Z", "endedAt": "2024-01-08T14:00:00Z"}
        )
    assert err.value.record_id == 3


def test_schedule_with_details_and_status():
    schedule = RecordNormalizer().schedule(
        {
            "id": 5,
            "user": 7,
            "room": 100,
            "start_datetime": "2024-01-08T09:00:00-05:00",
            "end_datetime": "2024-01-08T17:00:00-05:00",
            "status": "CANCELLED",
            "user_details": {"full_name": "Ana"},
            "room_details": {"name": "Lab 1"},
        }
    )

    assert schedule.schedule_id == 5
    assert schedule.status == ScheduleStatus.CANCELLED
    assert schedule.user_name == "Ana"
    assert schedule.room_name == "Lab 1"
    assert schedule.duration_hours() == 8


def test_schedule_with_unknown_status_is_malformed():
    with pytest.raises(MalformedRecordError):
        RecordNormalizer().schedule(
            {"user_id": 7, "room_id": 100, "start_time": "2024-01-08T09:00:00Z", "end_time": "2024-01-08T10:00:00Z", "status": "paused"}
        )


def test_batch_skips_and_counts_bad_records():
    batch = RecordNormalizer().entries(
        [
            {"id": 1, "user_id": 7, "room_id": 100, "startedAt": "2024-01-08T14:05:00Z"},
            {"id": 2, "user_id": 7, "room_id": 100, "startedAt": "not a date"},
            {"id": 3, "room_id": 100, "startedAt": "2024-01-08T14:05:00Z"},
            "garbage",
        ]
    )

    assert [e.entry_id for e in batch.records] == [1]
    assert [s.record_id for s in batch.skipped] == [2, 3, None]
    assert all(s.kind == "entry" for s in batch.skipped)


def test_ingest_stores_entries_and_assigns_ids():
    repo = InMemoryRoomEntryRepository()
    svc = RoomEntryService(repo, normalizer=RecordNormalizer())

    result = svc.ingest(
        [
            {"user_id": 7, "room_id": 100, "startedAt": "2024-01-08T14:05:00Z"},
            {"user_id": 8, "room_id": 100, "startedAt": "2024-01-08T15:00:00Z"},
            {"user_id": 8, "startedAt": "2024-01-08T15:00:00Z"},
        ]
    )

    assert result.to_dict()["ingested"] == 2
    assert result.to_dict()["entry_ids"] == [1, 2]
    assert len(result.skipped) == 1
    assert len(repo.list_range()) == 2


def test_reingesting_same_id_replaces_entry():
    repo = InMemoryRoomEntryRepository()
    svc = RoomEntryService(repo, normalizer=RecordNormalizer())

    svc.ingest([{"id": 4, "user_id": 7, "room_id": 100, "startedAt": "2024-01-08T14:05:00Z"}])
    svc.ingest([{"id": 4, "user_id": 7, "room_id": 100, "startedAt": "2024-01-08T14:05:00Z", "endedAt": "2024-01-08T16:00:00Z"}])

    entries = repo.list_range()
    assert len(entries) == 1
    assert entries[0].duration_hours() == pytest.approx(1 + 55 / 60)
