# classgroups/infrastructure/repositories/assignment_repo.py
from typing import List, Optional

from classgroups.infrastructure.db.session import SessionLocal
from classgroups.infrastructure.models import AssignmentDocument


class AssignmentRepo:
    def __init__(self, db=None):
        self.db = db or SessionLocal()

    def save(self, key: str, groups: List[List[dict]]) -> AssignmentDocument:
        """Replace the partition stored under `key`."""
        doc = self.get(key)
        if doc is None:
            doc = AssignmentDocument(key=key)
        doc.groups = groups
        self.db.add(doc)
        self.db.commit()
        self.db.refresh(doc)
        return doc

    def get(self, key: str) -> Optional[AssignmentDocument]:
        return self.db.query(AssignmentDocument).filter(AssignmentDocument.key == key).first()

    def delete(self, key: str) -> bool:
        doc = self.get(key)
        if doc is None:
            return False
        self.db.delete(doc)
        self.db.commit()
        return True
