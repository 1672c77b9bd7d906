from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_instant, parse_iso_date
from ..common.http import conflict_response, error_response, json_object
from ..container import Container
from ..core.enums import ScheduleStatus
from ..core.exceptions import ValidationError
from .service import UNSET


def register(app: Flask, container: Container) -> None:
    def _instant(data: dict, *keys):
        for key in keys:
            if data.get(key) not in (None, ""):
                return parse_instant(data[key], default_zone=container.calendar.zone)
        return None

    def _status(value):
        if value in (None, ""):
            return None
        try:
            return ScheduleStatus(str(value).lower())
        except ValueError:
            raise ValidationError(f"Unknown status: {value}")

    @app.route("/api/schedules/validate", methods=["POST"], endpoint="api_schedules_validate")
    def api_schedules_validate():
        try:
            candidate = container.normalizer.schedule(json_object())
            conflict = container.schedule_service.validate(candidate)
        except Exception as e:
            return error_response(e)
        return jsonify({
            "success": True,
            "valid": conflict is None,
            "conflict": conflict.to_dict() if conflict else None,
        }), 200

    @app.route("/api/schedules", methods=["POST"], endpoint="api_schedules_create")
    def api_schedules_create():
        try:
            candidate = container.normalizer.schedule(json_object())
            outcome = container.schedule_service.create(candidate)
        except Exception as e:
            return error_response(e)

        if not outcome.accepted:
            return conflict_response(outcome.conflict)
        return jsonify({"success": True, "schedule": outcome.schedule.to_dict()}), 201

    @app.route("/api/schedules/recurring", methods=["POST"], endpoint="api_schedules_recurring")
    def api_schedules_recurring():
        try:
            data = json_object()
            base = container.normalizer.schedule(data)
            result = container.schedule_service.create_recurring(
                base,
                range_start=parse_iso_date(data.get("range_start")),
                range_end=parse_iso_date(data.get("range_end")),
            )
        except Exception as e:
            return error_response(e)

        return jsonify({
            "success": result.created_count > 0,
            "created": result.created_count,
            "rejected": result.rejected_count,
            "schedules": [s.to_dict() for s in result.created],
            "conflicts": [
                {"start_datetime": candidate.start.isoformat(), **conflict.to_dict()}
                for candidate, conflict in result.rejected
            ],
        }), 201 if result.created_count else 409

    @app.route("/api/schedules/<int:schedule_id>", methods=["PUT"], endpoint="api_schedules_update")
    def api_schedules_update(schedule_id: int):
        try:
            data = json_object()
            outcome = container.schedule_service.update(
                schedule_id,
                user_id=data.get("user_id") or data.get("user"),
                room_id=data.get("room_id") or data.get("room"),
                start=_instant(data, "start_datetime", "start_time", "start"),
                end=_instant(data, "end_datetime", "end_time", "end"),
                status=_status(data.get("status")),
                notes=data["notes"] if "notes" in data else UNSET,
            )
        except Exception as e:
            return error_response(e)

        if not outcome.accepted:
            return conflict_response(outcome.conflict)
        return jsonify({"success": True, "schedule": outcome.schedule.to_dict()}), 200

    @app.route("/api/schedules/<int:schedule_id>", methods=["DELETE"], endpoint="api_schedules_delete")
    def api_schedules_delete(schedule_id: int):
        try:
            container.schedule_service.delete(schedule_id)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True}), 200

    @app.route("/api/schedules/user/<int:user_id>", methods=["DELETE"], endpoint="api_schedules_delete_user")
    def api_schedules_delete_user(user_id: int):
        try:
            deleted = container.schedule_service.delete_for_user(user_id)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "deleted": deleted}), 200
