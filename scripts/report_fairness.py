import sys
import os
import datetime as dt
import pandas as pd

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.storage import load_members, load_shifts
from fairshift.fairness import build_distribution
from fairshift.models import CompletedTask
from fairshift.utils import parse_date

period = sys.argv[1] if len(sys.argv) > 1 else "month"

members = {m.user_id: m for m in load_members()}
shifts = load_shifts()
if not shifts:
    raise SystemExit("No shifts in storage. Import or assign some first.")

# Assigned shifts stand in for completed work
records = []
for s in shifts:
    d = parse_date(s.date)
    if not s.is_assigned or d is None:
        continue
    member = members.get(s.assigned_to)
    records.append(CompletedTask(
        user_id=s.assigned_to,
        display_name=member.display_name if member else (s.assigned_to_name or "Unknown"),
        email=member.email if member else "",
        points=s.points_awarded if s.points_awarded is not None else s.points,
        completed_at=dt.datetime.combine(d, dt.time(12)),
    ))

latest = max(r.completed_at for r in records) if records else dt.datetime.now()
dist = build_distribution(records, period, now=latest)

table = pd.DataFrame([{
    "id": m.user_id,
    "name": m.display_name,
    "points": m.total_points,
    "tasks": m.tasks_completed,
    "share_pct": m.percentage_of_total,
    "deviation": m.deviation_from_average,
    "score": m.fairness_score,
    "trend": f"{m.trend} {m.trend_value:g}" if m.trend != "stable" else "stable",
} for m in dist.members])

print(f"\n=== Fairness ({period}) {dist.period_start_date}..{dist.period_end_date} ===")
if table.empty:
    print("No assigned shifts in this period.")
else:
    print(table.to_string(index=False))
print(f"Fairness index: {dist.fairness_index}  |  Gini: {dist.gini_coefficient}  |  "
      f"avg points/member: {dist.average_points_per_member}")
