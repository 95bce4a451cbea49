"""
Question model: an interview question, optionally tied to the HR entry
it was collected with.
"""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from db.session import Base
from datetime import datetime
import uuid


def _new_id() -> str:
    return str(uuid.uuid4())


class Question(Base):
    __tablename__ = "questions"

    id = Column(String(36), primary_key=True, default=_new_id)
    text = Column(Text, nullable=False)
    topic = Column(String(255), nullable=False, default="")
    asked_by = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Questions added on their own have no HR entry.
    hr_entry_id = Column(
        String(36), ForeignKey("hr_entries.id"), nullable=True, index=True
    )

    def __repr__(self) -> str:
        return f"<Question {self.id} - {self.text[:40]!r}>"
