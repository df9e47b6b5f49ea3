from __future__ import annotations

from flask import Flask, request

from ..common.web import login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/holidays", methods=["GET"], endpoint="list_holidays")
    @login_required
    def list_holidays():
        start_s = request.args.get("start")
        end_s = request.args.get("end")
        if not start_s or not end_s:
            raise ValidationError("start and end are required")
        return ok(container.holiday_service.list_range(start_date=start_s, end_date=end_s))
