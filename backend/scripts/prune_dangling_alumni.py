#!/usr/bin/env python3
"""
Maintenance script to find (and optionally remove) alumni entries that point
at users which no longer exist.

Deleting a user never touches the subjects collection, so references can go
stale. Run without flags for a dry-run report, with --apply to $pull them.
"""

import os
import sys
import argparse
from pymongo import MongoClient


def find_dangling_alumni(db):
    """Map subject_id -> list of alumni ids with no matching users.user_id"""
    referenced = db.subjects.distinct("alumni")
    if not referenced:
        return {}

    existing = set(db.users.distinct("user_id", {"user_id": {"$in": referenced}}))
    missing = [student_id for student_id in referenced if student_id not in existing]
    if not missing:
        return {}

    dangling = {}
    for subject in db.subjects.find(
        {"alumni": {"$in": missing}},
        {"_id": 0, "subject_id": 1, "alumni": 1}
    ):
        dangling[subject["subject_id"]] = [
            student_id for student_id in subject.get("alumni", []) if student_id not in existing
        ]
    return dangling


def prune_dangling_alumni(db, apply=False):
    """Report dangling alumni per subject; remove them when apply is True"""
    dangling = find_dangling_alumni(db)

    for subject_id, student_ids in dangling.items():
        print(f"  {subject_id}: {len(student_ids)} dangling -> {', '.join(student_ids)}")
        if apply:
            db.subjects.update_one(
                {"subject_id": subject_id},
                {"$pullAll": {"alumni": student_ids}}
            )

    total = sum(len(ids) for ids in dangling.values())
    action = "Removed" if apply else "Found"
    print(f"{action} {total} dangling references across {len(dangling)} subjects")
    return dangling


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--apply", action="store_true", help="remove dangling references")
    args = parser.parse_args(argv)

    mongo_url = os.environ.get('MONGO_URL')
    db_name = os.environ.get('DB_NAME')

    if not mongo_url or not db_name:
        print("ERROR: MONGO_URL and DB_NAME environment variables required")
        sys.exit(1)

    client = MongoClient(mongo_url)
    db = client[db_name]
    print(f"Connected to database: {db_name}")

    try:
        prune_dangling_alumni(db, apply=args.apply)
    finally:
        client.close()


if __name__ == "__main__":
    main()
