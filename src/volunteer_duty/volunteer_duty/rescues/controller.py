from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user_id, domain_error_response, json_body, login_required, wants_all_users, year_month_args
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    service = container.rescue_service

    @app.route("/api/rescues", methods=["POST"], endpoint="rescues_create")
    @login_required
    def rescues_create():
        try:
            data = json_body()
            rescue = service.create_rescue(current_user_id(), data)
            return jsonify(rescue.to_dict()), 201
        except DomainError as e:
            return domain_error_response(e)

    @app.route("/api/rescues/list", methods=["GET"], endpoint="rescues_list")
    @login_required
    def rescues_list():
        try:
            year, month = year_month_args()
            if wants_all_users():
                return jsonify(service.list_all_rescues(year=year, month=month))
            return jsonify(service.list_rescues(current_user_id(), year=year, month=month))
        except DomainError as e:
            return domain_error_response(e)
