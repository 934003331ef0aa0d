import sys
import os

# Ensure repository root on sys.path BEFORE importing local packages
repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from app.storage import load_members, load_shifts, save_members, save_shifts
from fairshift.config import load_config
from fairshift.assignment import auto_assign_shifts
from fairshift.ledger import calculate_historical_points, with_historical_points, apply_results, fold_session_points
from fairshift.summary import summarize

def main():
    if len(sys.argv) > 1 and sys.argv[1] in ("-h", "--help"):
        print("Usage: python scripts/assign_from_store.py [CONFIG_YML] [--dry-run]", file=sys.stderr)
        sys.exit(2)
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    dry_run = "--dry-run" in sys.argv
    config = load_config(args[0] if args else "data/sample_config.yml")

    members = load_members()
    shifts = load_shifts()
    history = calculate_historical_points(shifts, [m.user_id for m in members], config.memory_horizon_days)

    tracking = {}
    results = auto_assign_shifts(shifts, with_historical_points(members, history), config, tracking=tracking)
    summary = summarize(results)
    print(f"Assigned {summary.total_assigned} shifts, {summary.total_points:g} points "
          f"({summary.holiday_shifts} holiday)")
    for user_id, dist in summary.member_distribution.items():
        print(f"  {user_id}: {dist.shifts} shifts, {dist.points:g} points")

    if dry_run:
        print("Dry run: storage not updated")
        return
    save_shifts(apply_results(shifts, results))
    save_members(fold_session_points(members, tracking))

if __name__ == "__main__":
    main()
