#!/usr/bin/env python3
"""
Pre-register learners in a course cohort by email.

Members are stored by email only; each row is claimed by the matching account
the first time that user tries to enroll.

Usage:
    # From a CSV file (column: email):
    python app/scripts/provision_cohort_members.py --course intro-to-python --cohort "Batch 3" --csv batch3.csv

    # From inline emails:
    python app/scripts/provision_cohort_members.py --course intro-to-python --cohort "Batch 3" \\
        --emails alice@example.com bob@example.com

    # Dry-run (print what would happen):
    python app/scripts/provision_cohort_members.py --course intro-to-python --cohort "Batch 3" --csv batch3.csv --dry-run

CSV format (header row required):
    email
    alice@example.com
    bob@example.com
"""

from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path

if __package__ in (None, ""):
    repo_root = Path(__file__).resolve().parents[2]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from sqlalchemy import select

from app.core.config import get_settings
from app.core.errors import ApiError
from app.db.session import SessionLocal
from app.models import Cohort
from app.schemas.admin import CohortCreateRequest
from app.services.admin_course_service import add_cohort_members, create_cohort, get_course_or_404
from app.services.cohort_access import normalize_email
from app.services.course_resolver import CourseResolver


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Pre-register emails in a course cohort",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--course", required=True, help="Course id, slug or name")
    parser.add_argument("--cohort", required=True, help="Cohort name; created (active) when missing")

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--csv", type=Path, metavar="FILE", help="CSV file with an email column")
    source.add_argument("--emails", nargs="+", metavar="EMAIL", help="Space-separated list of email addresses")

    parser.add_argument("--dry-run", action="store_true", help="Print what would happen without writing to DB")
    return parser.parse_args()


def load_csv(path: Path) -> list[str]:
    if not path.exists():
        print(f"Error: CSV file not found: {path}", file=sys.stderr)
        sys.exit(1)
    emails: list[str] = []
    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            print("Error: CSV file is empty", file=sys.stderr)
            sys.exit(1)
        for i, row in enumerate(reader, start=2):
            norm = {k.strip().lower(): (v or "").strip() for k, v in row.items() if k}
            email = norm.get("email", "")
            if not email or "@" not in email:
                print(f"Warning: row {i} has no valid email, skipping")
                continue
            emails.append(normalize_email(email))
    return emails


def main() -> int:
    args = parse_args()
    emails = load_csv(args.csv) if args.csv else [normalize_email(e) for e in args.emails if e.strip()]
    emails = list(dict.fromkeys(emails))
    cohort_name = args.cohort.strip()

    if not emails:
        print("No emails to process.", file=sys.stderr)
        return 1

    print(f"Processing {len(emails)} email(s) → cohort {cohort_name!r} of course {args.course!r}")
    if args.dry_run:
        for email in emails:
            print(f"  {email}")
        print("\n[dry-run] No changes made.")
        return 0

    resolver = CourseResolver(get_settings().legacy_course_slugs)
    with SessionLocal() as db:
        try:
            course = get_course_or_404(db, resolver.resolve(db, args.course))
        except ApiError as exc:
            print(f"Error: {exc.message}: {args.course}", file=sys.stderr)
            return 1

        cohort = db.execute(
            select(Cohort).where(Cohort.course_id == course.id, Cohort.name == cohort_name)
        ).scalars().first()
        if cohort is None:
            cohort = create_cohort(db, course, CohortCreateRequest(name=cohort_name))
            print(f"Created cohort {cohort.id}")
        elif not cohort.is_active:
            print(f"Warning: cohort {cohort_name!r} is inactive; members will not be gated until it is activated")

        added = add_cohort_members(db, cohort, emails)

    print(f"\nNewly registered: {added}")
    print(f"Already present : {len(emails) - added}")
    print("\nDone.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
