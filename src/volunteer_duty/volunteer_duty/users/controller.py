from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.web import current_user_id, domain_error_response, json_body, login_required
from ..container import Container
from ..core.exceptions import DomainError
from .service import SessionUser


def register(app: Flask, container: Container, *, session_days: int = 7) -> None:
    app.permanent_session_lifetime = timedelta(days=session_days)

    def _start_session(s_user: SessionUser) -> None:
        session.clear()
        session.permanent = True
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

    @app.route("/api/register", methods=["POST"], endpoint="register")
    def register_account():
        try:
            data = json_body()
            user = container.account_service.register(
                username=data.get("username", ""),
                password=data.get("password", ""),
                name=data.get("name", ""),
            )
        except DomainError as e:
            return domain_error_response(e)

        _start_session(SessionUser(user_id=user.user_id, name=user.name, role=user.role))
        return jsonify(user.to_dict()), 201

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        try:
            data = json_body()
            s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
            user = container.auth_service.current_user(s_user.user_id)
        except DomainError as e:
            return domain_error_response(e)

        _start_session(s_user)
        return jsonify(user.to_dict()), 200

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True}), 200

    @app.route("/api/user", methods=["GET"], endpoint="current_user")
    @login_required
    def current_user():
        try:
            return jsonify(container.auth_service.current_user(current_user_id()).to_dict())
        except DomainError as e:
            session.clear()
            return domain_error_response(e)

    @app.route("/api/user/password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        try:
            data = json_body()
            container.account_service.change_password(
                current_user_id(),
                current_password=data.get("currentPassword", ""),
                new_password=data.get("newPassword", ""),
            )
            return jsonify({"success": True}), 200
        except DomainError as e:
            return domain_error_response(e)
