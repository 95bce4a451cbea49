"""
Job model: a job opening shared by a DA.
"""
from sqlalchemy import Column, String, Text, DateTime
from db.session import Base
from models.question import _new_id
from datetime import datetime

class Job(Base):
    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=_new_id)
    da_name = Column(String(255), nullable=False)
    company_name = Column(String(255), nullable=False, index=True)
    phone_number = Column(String(64), nullable=True)
    job_link = Column(Text, nullable=False)
    file_name = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Job {self.id} - {self.company_name}>"
