"""
Registration, login and profile use cases.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from docshop.core.codes import account_code, new_id, unique_code
from docshop.core.security import hash_password, verify_password
from docshop.domain.users import ROLE_ADMIN, ROLE_USER, public_user, username_from_email
from docshop.repositories.json_storage import JsonStore, find_record, get_store
from docshop.services.errors import (
    AdminConfirmationRequiredError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from docshop.services.session_service import issue_token

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    token: str
    user: dict


class UserService:
    """Handles the account registry: register, authenticate, profile."""

    def __init__(self, store: JsonStore | None = None) -> None:
        self.store = store or get_store()

    # -------------------------------------- helpers --------------------------------------
    @staticmethod
    def _text(value) -> str:
        return value.strip() if isinstance(value, str) else ""

    def _find_by_login(self, db: dict, login: str) -> dict | None:
        users = db["users"]
        for user in users:
            if user.get("email") == login:
                return user
        for user in users:
            if user.get("username") == login:
                return user
        return None

    # -------------------------------------- registration --------------------------------------
    def register(self, name: str, email: str, password: str) -> dict:
        name = self._text(name)
        email = self._text(email)
        if not name or not email or not isinstance(password, str) or not password:
            raise ValidationError("Thiếu thông tin")
        if "@" not in email:
            raise ValidationError("Email không hợp lệ")
        with self.store.transaction() as db:
            users = db["users"]
            if any(email in (u.get("email"), u.get("username")) for u in users):
                raise ConflictError("Email đã tồn tại")
            user = {
                "id": new_id(),
                "username": username_from_email(email, {u.get("username") for u in users}),
                "email": email,
                "name": name,
                "role": ROLE_USER,
                "passwordHash": hash_password(password),
                "ndck": unique_code(account_code, {u.get("ndck") for u in users}),
                "notifications": [],
                "unlockedItemIds": [],
            }
            users.append(user)
        logger.info("Registered user %s (%s)", user["id"], user["username"])
        return public_user(user)

    # -------------------------------------- login --------------------------------------
    def authenticate(self, login: str, password: str, as_admin: bool = False) -> LoginResult:
        raw_login = self._text(login)
        if not raw_login or not isinstance(password, str):
            raise InvalidCredentialsError("Sai thông tin")
        user = self._find_by_login(self.store.read(), raw_login)
        if not user or not verify_password(password, user.get("passwordHash")):
            logger.info("Rejected login for %r", raw_login)
            raise InvalidCredentialsError("Sai thông tin")
        if user.get("role") == ROLE_ADMIN and not as_admin:
            raise AdminConfirmationRequiredError('Hãy chọn "Bạn là admin?" để đăng nhập quản trị.')
        return LoginResult(token=issue_token(user), user=public_user(user))

    # -------------------------------------- profile --------------------------------------
    def get_profile(self, user_id: str) -> dict:
        user = find_record(self.store.read()["users"], user_id)
        if not user:
            raise NotFoundError("Không tìm thấy người dùng")
        profile = public_user(user)
        profile["unlockedItemIds"] = list(user.get("unlockedItemIds") or [])
        return profile
