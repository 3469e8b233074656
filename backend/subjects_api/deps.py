"""
FastAPI dependencies - database-backed repositories.
"""

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from .database import get_db
from .repositories.subjects import SubjectRepository


def get_subject_repository(db: AsyncIOMotorDatabase = Depends(get_db)) -> SubjectRepository:
    """Repository bound to the request's database handle"""
    return SubjectRepository(db)
