from unittest.mock import MagicMock

import bcrypt
import pytest

from timebill.models.user import User
from timebill.services.user_service import UserService


class TestUserService:
    def setup_method(self):
        self.mock_repo = MagicMock()
        self.service = UserService(self.mock_repo)

    def test_create_user_hashes_password(self):
        self.mock_repo.get_by_username.return_value = None
        self.mock_repo.create.return_value = User(id=1, username="admin", password_hash="hashed")
        result = self.service.create_user("admin", "secret")
        call_args = self.mock_repo.create.call_args[0][0]
        assert call_args.username == "admin"
        assert call_args.password_hash.startswith("$2b$")
        assert result.username == "admin"

    def test_create_user_rejects_duplicate(self):
        self.mock_repo.get_by_username.return_value = User(id=1, username="admin")
        with pytest.raises(ValueError):
            self.service.create_user("admin", "secret")
        self.mock_repo.create.assert_not_called()

    def test_authenticate_success(self):
        hashed = bcrypt.hashpw(b"secret", bcrypt.gensalt()).decode()
        self.mock_repo.get_by_username.return_value = User(id=1, username="admin", password_hash=hashed)
        result = self.service.authenticate("admin", "secret")
        assert result is not None
        assert result.username == "admin"

    def test_authenticate_wrong_password(self):
        hashed = bcrypt.hashpw(b"secret", bcrypt.gensalt()).decode()
        self.mock_repo.get_by_username.return_value = User(id=1, username="admin", password_hash=hashed)
        assert self.service.authenticate("admin", "wrong") is None

    def test_authenticate_user_not_found(self):
        self.mock_repo.get_by_username.return_value = None
        assert self.service.authenticate("nonexistent", "pass") is None

    def test_change_password(self):
        self.service.change_password("admin", "newpass")
        call_args = self.mock_repo.update_password_hash.call_args
        assert call_args[0][0] == "admin"
        assert call_args[0][1].startswith("$2b$")

    def test_list_users(self):
        self.mock_repo.list_all.return_value = [User(username="a"), User(username="b")]
        assert len(self.service.list_users()) == 2

    def test_get_by_id(self):
        self.mock_repo.get_by_id.return_value = User(id=3, username="c")
        assert self.service.get_by_id(3).username == "c"
        self.mock_repo.get_by_id.assert_called_once_with(3)
