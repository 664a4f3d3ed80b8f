"""ORM Models Package"""

from .application import ApplicationModel
from .internship import InternshipModel
from .user import UserModel

__all__ = [
    "ApplicationModel",
    "InternshipModel",
    "UserModel",
]
