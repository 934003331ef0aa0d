import json
import pytest
from app import storage
from conftest import member, shift


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(storage, "DATA_DIR", str(tmp_path))
    return tmp_path


def test_empty_storage_is_created(data_dir):
    assert storage.load_members() == []
    assert storage.load_shifts() == []
    assert (data_dir / "members.json").exists()


def test_members_round_trip_in_store_format(data_dir):
    m = member("u1", points=4, limits={"max_shifts_per_week": 2})
    storage.save_members([m])
    raw = json.loads((data_dir / "members.json").read_text())
    assert raw[0]["userId"] == "u1"
    assert raw[0]["limits"] == {"maxShiftsPerWeek": 2}
    assert storage.load_members() == [m]
    assert storage.get_member("u1") == m
    assert storage.get_member("nope") is None


def test_shifts_round_trip(data_dir):
    storage.save_shifts([shift("s1", "2025-02-10", status="assigned", assigned_to="u1")])
    raw = json.loads((data_dir / "shifts.json").read_text())
    assert raw[0]["assignedTo"] == "u1"
    loaded = storage.load_shifts()
    assert loaded[0].is_assigned
    assert loaded[0].date == "2025-02-10"
    assert not list(data_dir.glob("*.tmp"))
