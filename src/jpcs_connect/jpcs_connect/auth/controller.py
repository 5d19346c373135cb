from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import json_body
from ..container import Container
from .model import SessionUser


def _store_session(user: SessionUser) -> None:
    session.clear()
    session["uid"] = user.uid
    session["name"] = user.name
    session["role"] = user.role.value
    session["student_id"] = user.student_id


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/session", methods=["POST"], endpoint="sign_in")
    async def sign_in():
        data = json_body()
        user = await container.auth_service.sign_in(str(data.get("credential", "")))
        _store_session(user)
        return jsonify(
            {
                "success": True,
                "uid": user.uid,
                "name": user.name,
                "role": user.role.value,
                "profileCompleted": user.profile_completed,
                "next": "/student" if user.profile_completed else "/profile",
            }
        )

    @app.route("/admin/login", methods=["POST"], endpoint="admin_login")
    async def admin_login():
        data = json_body()
        user = container.auth_service.authenticate_admin(str(data.get("username", "")), str(data.get("password", "")))
        _store_session(user)
        return jsonify({"success": True, "name": user.name, "role": user.role.value})

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    async def logout():
        session.clear()
        return jsonify({"success": True, "message": "Signed out."})
