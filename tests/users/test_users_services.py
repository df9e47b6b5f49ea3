from __future__ import annotations

import pytest

from office_presence.core.enums import Role
from office_presence.core.exceptions import AuthenticationError, NotFoundError, ValidationError

from conftest import ALICE_ID, BOB_ID, CAROL_ID


def test_authenticate_success(container):
    s_user = container.auth_service.authenticate("Alice@Example.com", "secret123")

    assert s_user.user_id == ALICE_ID
    assert s_user.role == Role.MEMBER


@pytest.mark.parametrize(
    "email,password",
    [
        ("alice@example.com", "wrong"),
        ("nobody@example.com", "secret123"),
        ("carol@example.com", "secret123"),
    ],
)
def test_authenticate_rejects(container, email, password):
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        container.auth_service.authenticate(email, password)


def test_authenticate_requires_email(container):
    with pytest.raises(ValidationError):
        container.auth_service.authenticate("  ", "secret123")


def test_toggle_favorite_adds_then_removes(container, users_repo):
    favorites = container.favorites_service

    added = favorites.toggle(user_id=ALICE_ID, favorite_id=BOB_ID)
    assert added == {"favorites": [BOB_ID], "action": "added"}
    assert favorites.list_favorites(user_id=ALICE_ID) == [
        {"id": BOB_ID, "name": "Bob Member", "email": "bob@example.com"}
    ]

    removed = favorites.toggle(user_id=ALICE_ID, favorite_id=BOB_ID)
    assert removed == {"favorites": [], "action": "removed"}
    assert users_repo.favorites[ALICE_ID] == []


def test_cannot_favorite_yourself(container):
    with pytest.raises(ValidationError, match="Cannot favorite yourself"):
        container.favorites_service.toggle(user_id=ALICE_ID, favorite_id=ALICE_ID)


@pytest.mark.parametrize("favorite_id", [CAROL_ID, 999])
def test_cannot_favorite_missing_or_inactive(container, favorite_id):
    with pytest.raises(NotFoundError):
        container.favorites_service.toggle(user_id=ALICE_ID, favorite_id=favorite_id)
