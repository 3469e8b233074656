"""Pydantic models for the subjects service"""

from .subject import (
    Subject,
    SubjectCreate,
    SubjectUpdate,
    SubjectRename,
    EnrollmentRequest,
)
