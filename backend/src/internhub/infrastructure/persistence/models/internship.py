"""
Internship ORM Model
Columns follow the internship record layout
"""
from sqlalchemy import Column, String, Integer, Date, Boolean, Text

from internhub.core.database import Base


class InternshipModel(Base):
    """Internship table ORM model"""

    __tablename__ = "internships"

    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    level = Column(String(32), nullable=False)
    preferred_major = Column(String(255), nullable=False)
    open_date = Column(Date, nullable=False)
    close_date = Column(Date, nullable=False)
    company_name = Column(String(255), nullable=False)
    creator_id = Column(String(64), nullable=False, index=True)
    visible = Column(Boolean, nullable=False, default=False)
    num_slots = Column(Integer, nullable=False)
    filled_slots = Column(Integer, nullable=False, default=0)
    status = Column(String(32), nullable=False, default="Pending", index=True)

    def __repr__(self):
        return f"<InternshipModel {self.id} - {self.status}>"
