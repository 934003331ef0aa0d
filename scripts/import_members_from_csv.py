import sys
from pathlib import Path
from fairshift.output_formatter import read_table, members_from_rows, shifts_from_rows
from app.storage import save_members, save_shifts


def main():
    members_csv = Path(sys.argv[1] if len(sys.argv) > 1 else 'data/sample_members.csv')
    shifts_csv = Path(sys.argv[2]) if len(sys.argv) > 2 else None
    if not members_csv.exists():
        raise SystemExit(f"CSV not found: {members_csv}")
    members = members_from_rows(read_table(str(members_csv)))
    save_members(members)
    print(f"Imported {len(members)} members into storage.")
    if shifts_csv:
        if not shifts_csv.exists():
            raise SystemExit(f"CSV not found: {shifts_csv}")
        shifts = shifts_from_rows(read_table(str(shifts_csv)))
        save_shifts(shifts)
        print(f"Imported {len(shifts)} shifts into storage.")

if __name__ == '__main__':
    main()
