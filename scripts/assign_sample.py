import sys, os
import logging

# Add the parent directory to the path so we can import fairshift
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fairshift.config import load_config
from fairshift.assignment import AutoAssigner
from fairshift.summary import summarize
from fairshift.output_formatter import (
    read_table, members_from_rows, shifts_from_rows, results_table, distribution_table, export_csv,
)

if "-v" in sys.argv:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

config = load_config("data/sample_config.yml")
members = members_from_rows(read_table("data/sample_members.csv"))
shifts = shifts_from_rows(read_table("data/sample_shifts.csv"))

print(f"Assigning {len(shifts)} shifts across {len(members)} members...")

assigner = AutoAssigner(members, config)
results = assigner.run(shifts)
summary = summarize(results)

print("\n=== Assignments ===")
print(results_table(results, shifts).to_string(index=False))

print("\n=== Distribution ===")
print(distribution_table(summary, members).to_string(index=False))

print(f"\nTotal: {summary.total_assigned} shifts, {summary.total_points:g} points, "
      f"{summary.holiday_shifts} on holidays")
if assigner.skipped:
    print("Skipped:")
    for shift_id, reason in assigner.skipped:
        print(f"  {shift_id}: {reason}")

if "--out" in sys.argv:
    out_dir = "out"
    os.makedirs(out_dir, exist_ok=True)
    export_csv(results_table(results, shifts), os.path.join(out_dir, "assignments.csv"))
    export_csv(distribution_table(summary, members), os.path.join(out_dir, "distribution.csv"))
    print(f"\nWrote {out_dir}/assignments.csv and {out_dir}/distribution.csv")
