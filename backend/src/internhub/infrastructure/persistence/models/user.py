"""
User ORM Model
SQLAlchemy model for persistence
"""
from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.sql import func

from internhub.core.database import Base


class UserModel(Base):
    """User table ORM model - one row per user, role-specific columns nullable"""

    __tablename__ = "users"

    # Primary Key (matriculation number / staff id / company email handle)
    id = Column(String(64), primary_key=True, index=True)
    role = Column(String(32), nullable=False, index=True)

    # Personal Information
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)

    # Student
    year_of_study = Column(Integer, nullable=True)
    major = Column(String(255), nullable=True)

    # Company representative
    company_name = Column(String(255), nullable=True)
    position = Column(String(255), nullable=True)
    approval_status = Column(String(32), nullable=True)

    # Representative and staff
    department = Column(String(255), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<UserModel {self.id} - {self.role}>"
