from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    client_ip,
    current_user_id,
    domain_error_response,
    json_body,
    login_required,
    wants_all_users,
    year_month_args,
)
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    service = container.activity_service

    @app.route("/api/activities/daily", methods=["GET"], endpoint="activities_daily")
    @login_required
    def activities_daily():
        try:
            return jsonify(service.get_daily_activity(current_user_id()).to_dict())
        except DomainError as e:
            return domain_error_response(e)

    @app.route("/api/activities/recent", methods=["GET"], endpoint="activities_recent")
    @login_required
    def activities_recent():
        try:
            return jsonify([e.to_dict() for e in service.get_recent_activities(current_user_id())])
        except DomainError as e:
            return domain_error_response(e)

    @app.route("/api/activities/monthly", methods=["GET"], endpoint="activities_monthly")
    @login_required
    def activities_monthly():
        try:
            year, month = year_month_args()
            if wants_all_users():
                rows = service.get_all_users_monthly_activities(year=year, month=month)
            else:
                rows = service.get_monthly_activities(current_user_id(), year=year, month=month)
            return jsonify([r.to_dict() for r in rows])
        except DomainError as e:
            return domain_error_response(e)

    @app.route("/api/activities", methods=["POST"], endpoint="activities_create")
    @login_required
    def activities_create():
        try:
            data = json_body()
            activity = service.record_activity(current_user_id(), data.get("type"), ip=client_ip())
            return jsonify(activity.to_dict()), 201
        except DomainError as e:
            return domain_error_response(e)
