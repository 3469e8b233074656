"""Subject routes.

Literal-segment routes (``/subjects/teacher/...``, ``/subjects/student/...``)
are registered before the ``/subjects/{subject_id}`` routes so the literal
segment is never captured as an id.
"""

from fastapi import APIRouter, Depends, HTTPException

from subjects_api.config import logger
from subjects_api.deps import get_subject_repository
from subjects_api.models.subject import (
    SubjectCreate,
    SubjectUpdate,
    SubjectRename,
    EnrollmentRequest,
)
from subjects_api.repositories.subjects import SubjectRepository
from subjects_api.services import subjects as subject_service
from subjects_api.utils.serialization import serialize_doc

router = APIRouter(tags=["subjects"])

SUBJECT_NOT_FOUND = "Subject not found"

NOT_FOUND_RESPONSE = {404: {"description": SUBJECT_NOT_FOUND}}
BAD_REQUEST_RESPONSE = {400: {"description": "Missing required field"}}


@router.get("/subjects/teacher/{teacher}", summary="Get subjects by teacher")
async def get_subjects_by_teacher(teacher: str, repo: SubjectRepository = Depends(get_subject_repository)):
    """Get every subject taught by the given teacher (alumni not resolved)"""
    try:
        subjects = await subject_service.get_subjects_by_teacher(repo, teacher)
        return serialize_doc(subjects)
    except Exception as e:
        logger.error(f"Error listing subjects for teacher {teacher}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list subjects")


@router.get("/subjects/student/{student_id}", summary="Get subjects by student")
async def get_subjects_by_student(student_id: str, repo: SubjectRepository = Depends(get_subject_repository)):
    """Get every subject the given student is enrolled in"""
    try:
        subjects = await subject_service.get_subjects_by_student(repo, student_id)
        return serialize_doc(subjects)
    except Exception as e:
        logger.error(f"Error listing subjects for student {student_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list subjects")


@router.post("/subjects", status_code=201, summary="Create a subject", responses=BAD_REQUEST_RESPONSE)
async def create_subject(subject: SubjectCreate, repo: SubjectRepository = Depends(get_subject_repository)):
    """Create a new subject"""
    try:
        created = await subject_service.create_subject(repo, subject.model_dump())
        return serialize_doc(created)
    except Exception as e:
        logger.error(f"Error creating subject: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create subject")


@router.get("/subjects", summary="Get all subjects")
async def get_all_subjects(repo: SubjectRepository = Depends(get_subject_repository)):
    """Get all subjects with enrolled students resolved"""
    try:
        subjects = await subject_service.get_all_subjects(repo)
        return serialize_doc(subjects)
    except Exception as e:
        logger.error(f"Error listing subjects: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list subjects")


@router.get("/subjects/{subject_id}/students", summary="Get students of a subject", responses=NOT_FOUND_RESPONSE)
async def get_subject_students(subject_id: str, repo: SubjectRepository = Depends(get_subject_repository)):
    """Get the user records of everyone enrolled in a subject"""
    try:
        students = await subject_service.get_subject_students(repo, subject_id)
        if students is None:
            raise HTTPException(status_code=404, detail=SUBJECT_NOT_FOUND)
        return serialize_doc(students)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting students of subject {subject_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to get subject students")


@router.put(
    "/subjects/{subject_id}/rename",
    summary="Rename a subject",
    responses={**BAD_REQUEST_RESPONSE, **NOT_FOUND_RESPONSE}
)
async def rename_subject(subject_id: str, data: SubjectRename,
                         repo: SubjectRepository = Depends(get_subject_repository)):
    """Change only the name of a subject"""
    if not data.new_name:
        raise HTTPException(status_code=400, detail="newName is required")

    try:
        subject = await subject_service.rename_subject(repo, subject_id, data.new_name)
        if not subject:
            raise HTTPException(status_code=404, detail=SUBJECT_NOT_FOUND)
        return serialize_doc(subject)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error renaming subject {subject_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to rename subject")


@router.put(
    "/subjects/{subject_id}/enroll",
    summary="Enroll a student in a subject",
    responses={**BAD_REQUEST_RESPONSE, **NOT_FOUND_RESPONSE}
)
async def enroll_student(subject_id: str, data: EnrollmentRequest,
                         repo: SubjectRepository = Depends(get_subject_repository)):
    """Add a student to the subject's alumni (no-op if already enrolled)"""
    if not data.student_id:
        raise HTTPException(status_code=400, detail="studentId is required")

    try:
        subject = await subject_service.enroll_student(repo, subject_id, data.student_id)
        if not subject:
            raise HTTPException(status_code=404, detail=SUBJECT_NOT_FOUND)
        return serialize_doc(subject)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error enrolling {data.student_id} in subject {subject_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to enroll student")


@router.put(
    "/subjects/{subject_id}/drop",
    summary="Drop a student from a subject",
    responses={**BAD_REQUEST_RESPONSE, **NOT_FOUND_RESPONSE}
)
async def drop_student(subject_id: str, data: EnrollmentRequest,
                       repo: SubjectRepository = Depends(get_subject_repository)):
    """Remove a student from the subject's alumni (no-op if not enrolled)"""
    if not data.student_id:
        raise HTTPException(status_code=400, detail="studentId is required")

    try:
        subject = await subject_service.drop_student(repo, subject_id, data.student_id)
        if not subject:
            raise HTTPException(status_code=404, detail=SUBJECT_NOT_FOUND)
        return serialize_doc(subject)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error dropping {data.student_id} from subject {subject_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to drop student")


@router.get("/subjects/{subject_id}", summary="Get a subject by id", responses=NOT_FOUND_RESPONSE)
async def get_subject(subject_id: str, repo: SubjectRepository = Depends(get_subject_repository)):
    """Get subject details with enrolled students resolved"""
    try:
        subject = await subject_service.get_subject(repo, subject_id)
        if not subject:
            raise HTTPException(status_code=404, detail=SUBJECT_NOT_FOUND)
        return serialize_doc(subject)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting subject {subject_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to get subject")


@router.put("/subjects/{subject_id}", summary="Update a subject", responses=NOT_FOUND_RESPONSE)
async def update_subject(subject_id: str, data: SubjectUpdate,
                         repo: SubjectRepository = Depends(get_subject_repository)):
    """Update name, teacher and/or alumni of a subject"""
    try:
        subject = await subject_service.update_subject(repo, subject_id, data.model_dump(exclude_unset=True))
        if not subject:
            raise HTTPException(status_code=404, detail=SUBJECT_NOT_FOUND)
        return serialize_doc(subject)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating subject {subject_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update subject")


@router.delete("/subjects/{subject_id}", summary="Delete a subject", responses=NOT_FOUND_RESPONSE)
async def delete_subject(subject_id: str, repo: SubjectRepository = Depends(get_subject_repository)):
    """Delete a subject (enrolled users are left untouched)"""
    try:
        deleted = await subject_service.delete_subject(repo, subject_id)
        if not deleted:
            raise HTTPException(status_code=404, detail=SUBJECT_NOT_FOUND)
        return {"message": "Subject deleted"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting subject {subject_id}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete subject")
