from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, current_actor, json_body, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError
from .model import field_update_from_json


def _parse_user_id(value) -> int:
    try:
        user_id = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Valid userId is required")
    if user_id <= 0:
        raise ValidationError("Valid userId is required")
    return user_id


def _field_updates(payload: dict) -> dict:
    return {
        "note": field_update_from_json(payload, "note"),
        "start_time": field_update_from_json(payload, "startTime"),
        "end_time": field_update_from_json(payload, "endTime"),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/entries", methods=["GET"], endpoint="my_entries")
    @login_required
    def my_entries():
        start_s = request.args.get("startDate")
        end_s = request.args.get("endDate")
        if not start_s or not end_s:
            raise ValidationError("startDate and endDate are required")

        entries = container.attendance_service.list_entries(
            user_id=current_actor().user_id,
            start_date=start_s,
            end_date=end_s,
        )
        return ok([e.to_dict() for e in entries])

    @app.route("/api/entries", methods=["PUT"], endpoint="upsert_entry")
    @login_required
    def upsert_entry():
        payload = json_body()
        entry = container.attendance_service.set_status(
            actor=current_actor(),
            date=payload.get("date"),
            status=payload.get("status"),
            **_field_updates(payload),
        )
        return ok(entry.to_dict())

    @app.route("/api/entries/<date>", methods=["DELETE"], endpoint="delete_entry")
    @login_required
    def delete_entry(date: str):
        result = container.attendance_service.revert_to_wfh(actor=current_actor(), date=date)
        return ok(message=result["message"])

    @app.route("/api/entries/admin", methods=["PUT"], endpoint="admin_upsert_entry")
    @admin_required
    def admin_upsert_entry():
        payload = json_body()
        entry = container.attendance_service.admin_set_status(
            actor=current_actor(),
            target_user_id=_parse_user_id(payload.get("userId")),
            date=payload.get("date"),
            status=payload.get("status"),
            **_field_updates(payload),
        )
        return ok(entry.to_dict())

    @app.route("/api/entries/admin/<int:user_id>/<date>", methods=["DELETE"], endpoint="admin_delete_entry")
    @admin_required
    def admin_delete_entry(user_id: int, date: str):
        result = container.attendance_service.admin_revert(
            actor=current_actor(),
            target_user_id=user_id,
            date=date,
        )
        return ok(message=result["message"])
