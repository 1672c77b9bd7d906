from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, json_payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/room-entries", methods=["POST"], endpoint="api_room_entries_ingest")
    def api_room_entries_ingest():
        """Accepts one entry object or a list of them, in any of the known shapes."""
        try:
            data = json_payload()
            raws = data if isinstance(data, list) else [data]
            result = container.room_entry_service.ingest(raws)
        except Exception as e:
            return error_response(e)

        return jsonify({"success": True, **result.to_dict()}), 201 if result.stored else 200
