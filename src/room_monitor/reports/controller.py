from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response
from ..container import Container
from .filters import ReportFilters


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/summary", endpoint="api_reports_summary")
    def api_reports_summary():
        try:
            filters = ReportFilters.from_params(request.args)
            report = container.report_service.summary(filters)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "filters": filters.to_dict(), "report": report.to_dict()}), 200

    @app.route("/api/reports/overlaps", endpoint="api_reports_overlaps")
    def api_reports_overlaps():
        try:
            filters = ReportFilters.from_params(request.args)
            rows = container.report_service.overlaps(filters)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "filters": filters.to_dict(), "rows": [r.to_dict() for r in rows]}), 200

    @app.route("/api/reports/turn-comparison", endpoint="api_reports_turn_comparison")
    def api_reports_turn_comparison():
        try:
            filters = ReportFilters.from_params(request.args)
            data = container.report_service.turn_comparison(filters)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "filters": filters.to_dict(), **data.to_dict()}), 200
