from sqlalchemy import Column, String, Text, DateTime
from db.session import Base
from models.question import _new_id
from datetime import datetime


class Answer(Base):
    __tablename__ = "answers"
    id = Column(String(36), primary_key=True, default=_new_id)
    # Not a ForeignKey: answers may outlive or precede their question.
    question_id = Column(String(36), nullable=False, index=True)
    answer_text = Column(Text, nullable=False)
    answered_by = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Answer {self.id} for {self.question_id}>"
