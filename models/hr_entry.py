"""
HREntry model: an HR contact at a company, recorded by a DA.
Questions point back at it through questions.hr_entry_id; the list is
attached by the state store, not stored on this table.
"""
from sqlalchemy import Column, String, DateTime
from db.session import Base
from models.question import _new_id
from datetime import datetime


class HREntry(Base):
    __tablename__ = "hr_entries"

    id = Column(String(36), primary_key=True, default=_new_id)
    da_name = Column(String(255), nullable=False)
    company_name = Column(String(255), nullable=False, index=True)
    hr_name = Column(String(255), nullable=False)
    hr_contact = Column(String(64), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<HREntry {self.id} - {self.company_name}/{self.hr_name}>"
