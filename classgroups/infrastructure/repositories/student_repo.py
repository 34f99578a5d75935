# classgroups/infrastructure/repositories/student_repo.py
from typing import List, Optional

from sqlalchemy import func

from classgroups.infrastructure.db.session import SessionLocal
from classgroups.infrastructure.models import StudentRecord, now


class StudentRepo:
    def __init__(self, db=None):
        self.db = db or SessionLocal()

    def upsert(self, mode: str, student_id: str, name: str, payload: dict) -> StudentRecord:
        """Insert a submission or replace the stored one with the same id."""
        row = self.get(mode, student_id)
        if row is None:
            row = StudentRecord(mode=mode, student_id=student_id)
        row.name = name
        row.payload = payload
        row.submitted_at = now()
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def get(self, mode: str, student_id: str) -> Optional[StudentRecord]:
        return (
            self.db.query(StudentRecord)
            .filter(StudentRecord.mode == mode, StudentRecord.student_id == student_id)
            .first()
        )

    def list_by_mode(self, mode: str) -> List[StudentRecord]:
        return (
            self.db.query(StudentRecord)
            .filter(StudentRecord.mode == mode)
            .order_by(StudentRecord.id)
            .all()
        )

    def find_by_name(self, mode: str, name: str) -> List[StudentRecord]:
        return (
            self.db.query(StudentRecord)
            .filter(StudentRecord.mode == mode, func.lower(StudentRecord.name) == name.lower())
            .all()
        )

    def delete(self, mode: str, student_id: str) -> bool:
        row = self.get(mode, student_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.commit()
        return True

    def clear(self, mode: str) -> int:
        count = self.db.query(StudentRecord).filter(StudentRecord.mode == mode).delete()
        self.db.commit()
        return count
