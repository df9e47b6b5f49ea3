from __future__ import annotations

from flask import Flask, request

from ..common.web import login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/entries/team", methods=["GET"], endpoint="team_entries")
    @login_required
    def team_entries():
        return ok(container.team_service.month_view(month=request.args.get("month", "")))
