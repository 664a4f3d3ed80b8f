"""
User Directory Implementation
"""
from typing import Dict, Iterable, List, Optional

from internhub.application.repositories.interfaces import IUserDirectory
from internhub.domain.entities import User


class InMemoryUserDirectory(IUserDirectory):
    """Users keyed by id, filled from the gateway at start-up"""

    def __init__(self, users: Iterable[User] = ()):
        self._users: Dict[str, User] = {}
        self.replace(users)

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def all_users(self) -> List[User]:
        return list(self._users.values())

    def add(self, user: User) -> User:
        self._users[user.id] = user
        return user

    def replace(self, users: Iterable[User]) -> None:
        self._users = {user.id: user for user in users}
