from __future__ import annotations

from flask import Flask, session

from ..common.web import current_actor, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        payload = json_body()
        s_user = container.auth_service.authenticate(payload.get("email", ""), payload.get("password", ""))

        session.clear()
        session.permanent = bool(payload.get("rememberMe"))

        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        return ok(
            {
                "user": {
                    "id": s_user.user_id,
                    "name": s_user.name,
                    "email": s_user.email,
                    "role": s_user.role.value,
                }
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Logged out")

    @app.route("/api/users/favorites", methods=["GET"], endpoint="list_favorites")
    @login_required
    def list_favorites():
        return ok(container.favorites_service.list_favorites(user_id=current_actor().user_id))

    @app.route("/api/users/favorites/<int:favorite_id>", methods=["POST"], endpoint="toggle_favorite")
    @login_required
    def toggle_favorite(favorite_id: int):
        result = container.favorites_service.toggle(user_id=current_actor().user_id, favorite_id=favorite_id)
        return ok(result)
