from __future__ import annotations

from flask import Flask

from ..common.web import current_actor, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedule/match-preview", methods=["POST"], endpoint="match_preview")
    @login_required
    def match_preview():
        payload = json_body()
        preview = container.match_service.preview(
            actor=current_actor(),
            favorite_user_id=payload.get("favoriteUserId"),
            start_date=payload.get("startDate"),
            end_date=payload.get("endDate"),
        )
        return ok(preview.to_dict())

    @app.route("/api/schedule/match-apply", methods=["POST"], endpoint="match_apply")
    @login_required
    def match_apply():
        payload = json_body()
        result = container.match_service.apply(
            actor=current_actor(),
            favorite_user_id=payload.get("favoriteUserId"),
            dates=payload.get("dates"),
            override_leave=payload.get("overrideLeave") is True,
        )
        return ok(result.to_dict())
