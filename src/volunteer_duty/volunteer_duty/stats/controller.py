from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user_id, domain_error_response, login_required, wants_all_users, year_month_args
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    service = container.stats_service

    @app.route("/api/stats", methods=["GET"], endpoint="stats")
    @login_required
    def stats():
        try:
            year, month = year_month_args()
            if wants_all_users():
                return jsonify([s.to_dict() for s in service.get_all_users_stats(year=year, month=month)])
            return jsonify(service.get_stats(current_user_id(), year=year, month=month).to_dict())
        except DomainError as e:
            return domain_error_response(e)
