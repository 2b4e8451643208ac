"""
Export a week's data to CSV files and optionally purge it afterwards.

Usage:
    python scripts/export_weekly_data.py --week-start 2024-01-01 --week-end 2024-01-07 [--out DIR] [--yes]

Without --yes this is a dry run: the files are written and the counts that
would be deleted are printed, but nothing is removed.
"""
import argparse
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fieldforce.config import settings
from fieldforce.logging import setup_logging
from fieldforce.services.cleanup import cleanup_week
from fieldforce.services.weekly_report import build_weekly_report
from fieldforce.storage.provider import Storage
from fieldforce.storage.sql_provider import SqlStorage


def write_report_files(files: dict, out_dir: str) -> list:
    os.makedirs(out_dir, exist_ok=True)
    written = []
    for name, content in files.items():
        path = os.path.join(out_dir, f"{name}.csv")
        with open(path, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        written.append(path)
    return written


def export_weekly_data(storage: Storage, week_start: str, week_end: str, out_dir: str, confirm: bool = False) -> dict:
    """
    Write the weekly CSVs to ``out_dir`` and, when ``confirm`` is set, purge the week.

    The purge only runs after every file was written.
    """
    report = build_weekly_report(storage, week_start, week_end)
    summary = report.summary
    target = os.path.join(out_dir, summary["week_number"])
    written = write_report_files(report.files, target)
    for path in written:
        print(f"[EXPORT] {path}")

    if len(written) != len(report.files):
        print("[ERROR] Not every file was written; skipping cleanup.")
        return {"files": written, "deleted": None}

    if not confirm:
        print(
            f"[DRY-RUN] Would delete up to {summary['completed_tasks']} completed tasks, "
            f"{summary['total_locations']} locations and {summary['total_logs']} logs."
        )
        return {"files": written, "deleted": None}

    result = cleanup_week(storage, week_start, week_end, backup_confirmed=True)
    print(
        f"[DELETE] Removed {result.deleted['tasks']} tasks, "
        f"{result.deleted['locations']} locations and {result.deleted['logs']} logs."
    )
    return {"files": written, "deleted": result.deleted}


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Export a week's data to CSV and optionally purge it")
    parser.add_argument("--week-start", required=True, help="First day of the week (YYYY-MM-DD)")
    parser.add_argument("--week-end", required=True, help="Last day of the week (YYYY-MM-DD)")
    parser.add_argument("--out", default="exports", help="Directory to write the CSV files into")
    parser.add_argument("--yes", action="store_true", help="Delete the exported data after a successful export")
    args = parser.parse_args()

    setup_logging()
    export_weekly_data(
        SqlStorage.from_url(settings.database_url),
        args.week_start,
        args.week_end,
        args.out,
        confirm=args.yes,
    )
