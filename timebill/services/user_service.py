from __future__ import annotations

import logging

import bcrypt

from timebill.models.user import User
from timebill.repositories.base import UserRepository

logger = logging.getLogger(__name__)


def _hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


class UserService:
    def __init__(self, repo: UserRepository) -> None:
        self.repo = repo

    def create_user(self, username: str, password: str) -> User:
        if self.repo.get_by_username(username) is not None:
            raise ValueError(f"Username '{username}' already exists")
        result = self.repo.create(User(username=username, password_hash=_hash_password(password)))
        logger.info("User created: %s", username)
        return result

    def get_by_id(self, user_id: int) -> User | None:
        return self.repo.get_by_id(user_id)

    def authenticate(self, username: str, password: str) -> User | None:
        user = self.repo.get_by_username(username)
        if user is None:
            return None
        if bcrypt.checkpw(password.encode(), user.password_hash.encode()):
            return user
        return None

    def change_password(self, username: str, new_password: str) -> None:
        self.repo.update_password_hash(username, _hash_password(new_password))
        logger.info("Password changed for user: %s", username)

    def list_users(self) -> list[User]:
        return self.repo.list_all()
