import os
import json
from typing import List, Optional
import tempfile
from fairshift.models import Member, Shift

DATA_DIR = os.environ.get("FAIRSHIFT_DATA_DIR") or os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")


def _members_path() -> str:
    return os.path.join(DATA_DIR, "members.json")


def _shifts_path() -> str:
    return os.path.join(DATA_DIR, "shifts.json")


def _ensure_storage():
    os.makedirs(DATA_DIR, exist_ok=True)
    for path in (_members_path(), _shifts_path()):
        if not os.path.exists(path):
            with open(path, "w") as f:
                json.dump([], f)


def _atomic_write(path: str, data: str) -> None:
    dir_name = os.path.dirname(path)
    fd, tmp_path = tempfile.mkstemp(dir=dir_name, prefix=os.path.basename(path) + ".", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


def load_members() -> List[Member]:
    _ensure_storage()
    with open(_members_path()) as f:
        raw = json.load(f)
    return [Member.model_validate(m) for m in raw]


def save_members(members: List[Member]) -> None:
    _ensure_storage()
    payload = json.dumps([m.model_dump(mode="json", by_alias=True, exclude_none=True) for m in members], indent=2)
    _atomic_write(_members_path(), payload)


def get_member(user_id: str) -> Optional[Member]:
    for m in load_members():
        if m.user_id == user_id:
            return m
    return None


def load_shifts() -> List[Shift]:
    _ensure_storage()
    with open(_shifts_path()) as f:
        raw = json.load(f)
    return [Shift.model_validate(s) for s in raw]


def save_shifts(shifts: List[Shift]) -> None:
    _ensure_storage()
    payload = json.dumps([s.model_dump(mode="json", by_alias=True, exclude_none=True) for s in shifts], indent=2)
    _atomic_write(_shifts_path(), payload)
