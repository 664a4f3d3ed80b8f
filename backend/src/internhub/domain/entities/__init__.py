"""Domain Entities - Core business objects"""

from .user import User, Student, CompanyRepresentative, Staff
from .application import Application
from .internship import Internship
__all__ = ["User", "Student", "CompanyRepresentative", "Staff", "Application", "Internship"]
