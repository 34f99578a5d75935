# classgroups/infrastructure/models.py
"""
SQLAlchemy ORM models.

The store is document-shaped: each submission and each saved partition is
kept as a JSON payload in the camelCase layout the survey forms produce.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, JSON, String, UniqueConstraint

from classgroups.infrastructure.db.session import Base


def now():
    return datetime.now(timezone.utc)


class StudentRecord(Base):
    __tablename__ = "student_records"
    __table_args__ = (UniqueConstraint("mode", "student_id", name="uq_student_mode_id"),)

    id = Column(Integer, primary_key=True)
    mode = Column(String(20), nullable=False, index=True)
    student_id = Column(String(64), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    payload = Column(JSON, default=dict)
    submitted_at = Column(DateTime, default=now)


class AssignmentDocument(Base):
    __tablename__ = "assignment_documents"

    key = Column(String(64), primary_key=True)
    groups = Column(JSON, default=list)
    updated_at = Column(DateTime, default=now, onupdate=now)
