"""
Subject data access - direct operations on the ``subjects`` collection.

Every method is a single store command (plus one ``users`` lookup for the
reads that resolve ``alumni``). Lookups by id return ``None`` when the
subject does not exist.
"""

from typing import Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from subjects_api.models.subject import Subject

NO_ID = {"_id": 0}


def unique_ids(ids: List[str]) -> List[str]:
    """Drop repeated ids, keeping first-occurrence order."""
    return list(dict.fromkeys(ids))


class SubjectRepository:
    """CRUD and enrollment operations for subjects."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.subjects = db.subjects
        self.users = db.users

    async def create(self, fields: dict) -> dict:
        """Insert a new subject and return the stored record."""
        subject = Subject(**fields)
        doc = subject.model_dump()
        doc["alumni"] = unique_ids(doc["alumni"])
        await self.subjects.insert_one(doc)
        doc.pop("_id", None)
        return doc

    async def get_by_id(self, subject_id: str) -> Optional[dict]:
        doc = await self.subjects.find_one({"subject_id": subject_id}, NO_ID)
        if not doc:
            return None
        populated = await self._populate([doc])
        return populated[0]

    async def get_all(self) -> List[dict]:
        docs = await self.subjects.find({}, NO_ID).to_list(None)
        return await self._populate(docs)

    async def get_by_teacher(self, teacher: str) -> List[dict]:
        return await self.subjects.find({"teacher": teacher}, NO_ID).to_list(None)

    async def get_by_student(self, student_id: str) -> List[dict]:
        return await self.subjects.find({"alumni": student_id}, NO_ID).to_list(None)

    async def rename(self, subject_id: str, new_name: str) -> Optional[dict]:
        return await self._update_one(subject_id, {"$set": {"name": new_name}})

    async def enroll(self, subject_id: str, student_id: str) -> Optional[dict]:
        return await self._update_one(subject_id, {"$addToSet": {"alumni": student_id}})

    async def drop(self, subject_id: str, student_id: str) -> Optional[dict]:
        return await self._update_one(subject_id, {"$pull": {"alumni": student_id}})

    async def update(self, subject_id: str, fields: dict) -> Optional[dict]:
        """Merge the given fields into the subject.

        ``None`` values are ignored so required fields can't be unset.
        """
        changes = {key: value for key, value in fields.items() if value is not None}
        if "alumni" in changes:
            changes["alumni"] = unique_ids(changes["alumni"])
        if not changes:
            return await self.subjects.find_one({"subject_id": subject_id}, NO_ID)
        return await self._update_one(subject_id, {"$set": changes})

    async def delete(self, subject_id: str) -> Optional[dict]:
        return await self.subjects.find_one_and_delete(
            {"subject_id": subject_id},
            projection=NO_ID
        )

    async def get_students(self, subject_id: str) -> Optional[List[dict]]:
        """Resolved user records of the subject's alumni, or None if the subject is missing."""
        doc = await self.subjects.find_one(
            {"subject_id": subject_id},
            {"_id": 0, "alumni": 1}
        )
        if doc is None:
            return None
        alumni = doc.get("alumni", [])
        users = await self._find_users(alumni)
        return [users[student_id] for student_id in alumni if student_id in users]

    async def _update_one(self, subject_id: str, update: dict) -> Optional[dict]:
        return await self.subjects.find_one_and_update(
            {"subject_id": subject_id},
            update,
            projection=NO_ID,
            return_document=ReturnDocument.AFTER
        )

    async def _find_users(self, user_ids: List[str]) -> Dict[str, dict]:
        if not user_ids:
            return {}
        users = await self.users.find(
            {"user_id": {"$in": list(user_ids)}},
            NO_ID
        ).to_list(None)
        return {u["user_id"]: u for u in users}

    async def _populate(self, docs: List[dict]) -> List[dict]:
        """Replace each subject's alumni ids with the matching user records.

        Ids without a user record are left out of the resolved list.
        """
        wanted = unique_ids([sid for doc in docs for sid in doc.get("alumni", [])])
        users = await self._find_users(wanted)
        for doc in docs:
            doc["alumni"] = [users[sid] for sid in doc.get("alumni", []) if sid in users]
        return docs
