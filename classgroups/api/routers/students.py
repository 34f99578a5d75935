# classgroups/api/routers/students.py
"""
Student endpoints: survey submissions, roster listing, analytics.
"""
from fastapi import APIRouter, Depends, HTTPException

from classgroups.domain.models import InterestSubmission, MbtiSubmission, Mode
from classgroups.api.deps import get_student_service
from classgroups.services.student_service import (
    DuplicateStudentName,
    StudentNotFound,
    StudentService,
    to_payload,
)

router = APIRouter()


@router.post("/interests", summary="Submit interests and birth date")
def submit_interests(req: InterestSubmission, service: StudentService = Depends(get_student_service)):
    try:
        student = service.submit_interest(req)
    except DuplicateStudentName as e:
        raise HTTPException(status_code=409, detail=str(e))
    return to_payload(student)


@router.post("/mbti", summary="Submit an MBTI type")
def submit_mbti(req: MbtiSubmission, service: StudentService = Depends(get_student_service)):
    try:
        student = service.submit_mbti(req)
    except DuplicateStudentName as e:
        raise HTTPException(status_code=409, detail=str(e))
    return to_payload(student)


@router.get("/{mode}", summary="List the roster for a mode")
def list_students(mode: Mode, service: StudentService = Depends(get_student_service)):
    roster = service.roster(mode)
    return {"mode": mode.value, "students": [to_payload(s) for s in roster]}


@router.delete("/{mode}", summary="Clear all submissions and groups for a mode")
def clear_students(mode: Mode, service: StudentService = Depends(get_student_service)):
    removed = service.clear(mode)
    return {"mode": mode.value, "removed": removed}


@router.get("/{mode}/analytics", summary="Roster statistics for the dashboard")
def roster_analytics(mode: Mode, service: StudentService = Depends(get_student_service)):
    return service.analytics(mode)


@router.get("/{mode}/{student_id}", summary="Get one student record")
def get_student(mode: Mode, student_id: str, service: StudentService = Depends(get_student_service)):
    try:
        return to_payload(service.get(mode, student_id))
    except StudentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{mode}/{student_id}", summary="Delete one student record")
def delete_student(mode: Mode, student_id: str, service: StudentService = Depends(get_student_service)):
    try:
        service.delete(mode, student_id)
    except StudentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"deleted": student_id}
