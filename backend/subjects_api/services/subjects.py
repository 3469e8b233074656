"""
Subject use cases.

Thin seam between the HTTP routes and the repository; each coroutine has the
same contract as the repository method it calls.
"""

from typing import List, Optional

from subjects_api.config import logger
from subjects_api.repositories.subjects import SubjectRepository


async def create_subject(repo: SubjectRepository, fields: dict) -> dict:
    subject = await repo.create(fields)
    logger.info(f"Created subject {subject['subject_id']} ({subject['name']})")
    return subject


async def get_subject(repo: SubjectRepository, subject_id: str) -> Optional[dict]:
    return await repo.get_by_id(subject_id)


async def get_all_subjects(repo: SubjectRepository) -> List[dict]:
    return await repo.get_all()


async def get_subjects_by_teacher(repo: SubjectRepository, teacher: str) -> List[dict]:
    return await repo.get_by_teacher(teacher)


async def get_subjects_by_student(repo: SubjectRepository, student_id: str) -> List[dict]:
    return await repo.get_by_student(student_id)


async def get_subject_students(repo: SubjectRepository, subject_id: str) -> Optional[List[dict]]:
    return await repo.get_students(subject_id)


async def rename_subject(repo: SubjectRepository, subject_id: str, new_name: str) -> Optional[dict]:
    subject = await repo.rename(subject_id, new_name)
    if subject:
        logger.info(f"Renamed subject {subject_id} to {new_name}")
    return subject


async def enroll_student(repo: SubjectRepository, subject_id: str, student_id: str) -> Optional[dict]:
    subject = await repo.enroll(subject_id, student_id)
    if subject:
        logger.info(f"Enrolled student {student_id} in subject {subject_id}")
    return subject


async def drop_student(repo: SubjectRepository, subject_id: str, student_id: str) -> Optional[dict]:
    subject = await repo.drop(subject_id, student_id)
    if subject:
        logger.info(f"Dropped student {student_id} from subject {subject_id}")
    return subject


async def update_subject(repo: SubjectRepository, subject_id: str, fields: dict) -> Optional[dict]:
    subject = await repo.update(subject_id, fields)
    if subject:
        logger.info(f"Updated subject {subject_id}: {sorted(fields)}")
    return subject


async def delete_subject(repo: SubjectRepository, subject_id: str) -> Optional[dict]:
    subject = await repo.delete(subject_id)
    if subject:
        logger.info(f"Deleted subject {subject_id}")
    return subject
