from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    email: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_non_empty(email, "Email").lower()
        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("User %s logged in", user.user_id)
        return SessionUser(user_id=user.user_id, name=user.name, email=user.email, role=user.role)


class UserDirectory:
    """Lookups other services make against the user store."""

    def __init__(self, users: UserRepository):
        self._users = users

    def require_active(self, user_id: int, *, label: str = "User") -> User:
        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active:
            raise NotFoundError(f"{label} not found")
        return user


class FavoritesService:
    """Use case: maintain a user's set of favorite colleagues."""

    def __init__(self, users: UserRepository):
        self._users = users
        self._directory = UserDirectory(users)

    def toggle(self, *, user_id: int, favorite_id: int) -> dict:
        if int(favorite_id) == int(user_id):
            raise ValidationError("Cannot favorite yourself")

        self._directory.require_active(favorite_id)

        current = {u.user_id for u in self._users.list_favorites(user_id)}
        if int(favorite_id) in current:
            self._users.remove_favorite(user_id=user_id, favorite_id=favorite_id)
            action = "removed"
        else:
            self._users.add_favorite(user_id=user_id, favorite_id=favorite_id)
            action = "added"

        logger.info("User %s %s favorite %s", user_id, action, favorite_id)
        favorites = [u.user_id for u in self._users.list_favorites(user_id)]
        return {"favorites": favorites, "action": action}

    def list_favorites(self, *, user_id: int) -> list[dict]:
        return [u.public_dict() for u in self._users.list_favorites(user_id)]
