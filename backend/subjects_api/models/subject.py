"""Subject-related Pydantic models"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime, timezone
import uuid


def new_subject_id() -> str:
    return f"subj_{uuid.uuid4().hex[:8]}"


class Subject(BaseModel):
    """Stored shape of a document in the ``subjects`` collection."""
    model_config = ConfigDict(extra="ignore")
    subject_id: str = Field(default_factory=new_subject_id)
    name: str
    teacher: str
    alumni: List[str] = []  # user_id of each enrolled student, no duplicates
    created_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class SubjectCreate(BaseModel):
    name: str = Field(min_length=1)
    teacher: str = Field(min_length=1)
    alumni: List[str] = []


class SubjectUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""
    name: Optional[str] = Field(default=None, min_length=1)
    teacher: Optional[str] = Field(default=None, min_length=1)
    alumni: Optional[List[str]] = None


class SubjectRename(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    new_name: Optional[str] = Field(default=None, alias="newName")


class EnrollmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    student_id: Optional[str] = Field(default=None, alias="studentId")
