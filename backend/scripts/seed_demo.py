"""CLI script to seed a database with demo departments and subjects.
Usage: DATABASE_URL=... python scripts/seed_demo.py [--dry-run]
"""
import argparse
import sys
import pathlib
# Ensure `backend/` is on sys.path so `classroom_api` imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from classroom_api import models, repositories
from classroom_api.config import Settings
from classroom_api.database import Database

DEMO_DEPARTMENTS = [
    {"code": "CS", "name": "Computer Science", "description": "Programming, systems and theory"},
    {"code": "MATH", "name": "Mathematics", "description": "Pure and applied mathematics"},
    {"code": "ENG", "name": "English", "description": "Language and literature"},
]

DEMO_SUBJECTS = [
    {"department": "CS", "code": "CS101", "name": "Introduction to Programming"},
    {"department": "CS", "code": "CS201", "name": "Data Structures"},
    {"department": "CS", "code": "CS301", "name": "Functional Programming"},
    {"department": "MATH", "code": "MATH101", "name": "Calculus I"},
    {"department": "MATH", "code": "MATH220", "name": "Linear Algebra"},
    {"department": "ENG", "code": "ENG110", "name": "Academic Writing"},
]


def seed(db: Database, dry_run: bool = False) -> dict:
    """Insert the demo rows whose codes are not present yet.

    Returns counts of created and skipped departments/subjects.
    """
    summary = {"departments_created": 0, "subjects_created": 0, "skipped": 0}
    db.create_all()
    with db.session() as session:
        dept_repo = repositories.DepartmentRepository(session)
        subj_repo = repositories.SubjectRepository(session)
        dept_ids = {}
        for d in DEMO_DEPARTMENTS:
            existing = dept_repo.get_by_code(d["code"])
            if existing:
                dept_ids[d["code"]] = existing.id
                summary["skipped"] += 1
                continue
            if dry_run:
                summary["departments_created"] += 1
                continue
            created = dept_repo.create(models.Department(**d))
            dept_ids[d["code"]] = created.id
            summary["departments_created"] += 1
        for s in DEMO_SUBJECTS:
            if subj_repo.get_by_code(s["code"]):
                summary["skipped"] += 1
                continue
            summary["subjects_created"] += 1
            if dry_run:
                continue
            subj_repo.create(models.Subject(
                department_id=dept_ids[s["department"]],
                code=s["code"],
                name=s["name"],
            ))
    return summary


def main(dry_run: bool = False):
    settings = Settings()
    db = Database.from_settings(settings)
    try:
        summary = seed(db, dry_run=dry_run)
    finally:
        db.dispose()
    prefix = "Would create" if dry_run else "Created"
    print(f"{prefix} {summary['departments_created']} departments, "
          f"{summary['subjects_created']} subjects, skipped {summary['skipped']}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--dry-run', action='store_true', help='Report what would be inserted without writing')
    args = parser.parse_args()
    main(dry_run=args.dry_run)
