# classgroups/api/deps.py
from fastapi import Depends
from sqlalchemy.orm import Session

from classgroups.infrastructure.db.session import get_db
from classgroups.infrastructure.repositories.assignment_repo import AssignmentRepo
from classgroups.infrastructure.repositories.student_repo import StudentRepo
from classgroups.services.grouping_service import GroupingService
from classgroups.services.student_service import StudentService


def get_student_service(db: Session = Depends(get_db)) -> StudentService:
    return StudentService(StudentRepo(db), AssignmentRepo(db))


def get_grouping_service(db: Session = Depends(get_db)) -> GroupingService:
    students = get_student_service(db)
    return GroupingService(students, students.assignment_repo)
