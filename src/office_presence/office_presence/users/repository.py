from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_active(self) -> Sequence[User]:
        """Active users ordered by name."""

        raise NotImplementedError

    def list_favorites(self, user_id: int) -> Sequence[User]:
        raise NotImplementedError

    def add_favorite(self, *, user_id: int, favorite_id: int) -> None:
        raise NotImplementedError

    def remove_favorite(self, *, user_id: int, favorite_id: int) -> bool:
        raise NotImplementedError
