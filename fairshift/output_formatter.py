"""
Tabular views of an assignment run for the command-line scripts.
"""

import pandas as pd
from typing import Dict, List, Optional
from fairshift.models import AssignmentResult, AssignmentSummary, Member, Shift
from fairshift.utils import parse_date

RESULT_COLUMNS = ["date", "time", "shift_id", "assigned_to", "name", "points", "holiday"]
DISTRIBUTION_COLUMNS = ["user_id", "name", "shifts", "points", "historical_points", "new_total"]


def results_table(results: List[AssignmentResult], shifts: List[Shift]) -> pd.DataFrame:
    """One row per assignment, in date order."""
    by_id = {s.id: s for s in shifts}
    rows = []
    for r in results:
        shift = by_id.get(r.shift_id)
        shift_date = parse_date(shift.date) if shift else None
        rows.append({
            "date": shift_date.isoformat() if shift_date else "",
            "time": shift.time if shift else "",
            "shift_id": r.shift_id,
            "assigned_to": r.assigned_to,
            "name": r.assigned_to_name,
            "points": r.points_awarded,
            "holiday": "HOL" if r.is_holiday else "",
        })
    df = pd.DataFrame(rows, columns=RESULT_COLUMNS)
    return df.sort_values(["date", "time"], kind="stable").reset_index(drop=True)


def distribution_table(summary: AssignmentSummary, members: List[Member]) -> pd.DataFrame:
    """Per-member shifts and points for the run, lowest new total first."""
    rows = []
    for m in members:
        dist = summary.member_distribution.get(m.user_id)
        shifts = dist.shifts if dist else 0
        points = dist.points if dist else 0.0
        rows.append({
            "user_id": m.user_id,
            "name": m.display_name,
            "shifts": shifts,
            "points": points,
            "historical_points": m.historical_points,
            "new_total": m.historical_points + points,
        })
    df = pd.DataFrame(rows, columns=DISTRIBUTION_COLUMNS)
    return df.sort_values("new_total", kind="stable").reset_index(drop=True)


def unassigned_shifts(results: List[AssignmentResult], shifts: List[Shift]) -> List[str]:
    assigned = {r.shift_id for r in results}
    return [s.id for s in shifts if not s.is_assigned and s.id not in assigned]


def export_csv(df: pd.DataFrame, path: str, index: bool = False) -> None:
    df.to_csv(path, index=index)


def read_table(path: str, columns: Optional[Dict[str, str]] = None) -> List[dict]:
    """Rows of a CSV as dicts with empty cells removed, optionally renaming columns."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    if columns:
        df = df.rename(columns=columns)
    return [{k: v for k, v in row.items() if v != ""} for row in df.to_dict(orient="records")]


def parse_windows(text: str) -> List[dict]:
    """'1 06:00-08:00; 1 18:00-20:00; 6 00:00-23:59' -> day availability rules."""
    rules: Dict[int, List[dict]] = {}
    for part in (text or "").split(";"):
        part = part.strip()
        if not part:
            continue
        day, _, span = part.partition(" ")
        start, _, end = span.strip().partition("-")
        rules.setdefault(int(day), []).append({"start": start.strip(), "end": end.strip()})
    return [{"day_of_week": day, "time_slots": slots} for day, slots in rules.items()]


def members_from_rows(rows: List[dict]) -> List[Member]:
    members = []
    for row in rows:
        limits = {k: int(row[k]) for k in ("max_shifts_per_week", "max_shifts_per_month",
                                             "min_shifts_per_week", "min_shifts_per_month") if k in row}
        availability = {}
        if "never_available" in row:
            availability["never_available"] = parse_windows(row["never_available"])
        if "preferred_times" in row:
            availability["preferred_times"] = parse_windows(row["preferred_times"])
        members.append(Member(
            user_id=row["user_id"].strip(),
            display_name=row.get("display_name", "").strip(),
            email=row.get("email", "").strip(),
            historical_points=float(row.get("historical_points") or 0),
            availability=availability or None,
            limits=limits or None,
        ))
    return members


def shifts_from_rows(rows: List[dict]) -> List[Shift]:
    return [Shift(
        id=row["id"].strip(),
        date=row.get("date", ""),
        time=row.get("time", ""),
        points=float(row.get("points") or 0),
        status=row.get("status", "unassigned"),
        assigned_to=row.get("assigned_to"),
    ) for row in rows]
