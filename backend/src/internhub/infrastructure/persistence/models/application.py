"""
Application ORM Model
Columns follow the application record layout, plus the withdrawal reason
"""
from sqlalchemy import Column, String, Integer, DateTime, Text

from internhub.core.database import Base


class ApplicationModel(Base):
    """Student application table ORM model"""

    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=False)

    # Not declared as foreign keys: the gateway drops orphans on load instead
    internship_id = Column(Integer, nullable=False, index=True)
    student_id = Column(String(64), nullable=False, index=True)

    date_applied = Column(DateTime, nullable=False)
    status = Column(String(32), nullable=False, default="Pending", index=True)
    previous_status = Column(String(32), nullable=True)
    withdrawal_reason = Column(Text, nullable=True)

    def __repr__(self):
        return f"<ApplicationModel {self.id} - {self.status}>"
