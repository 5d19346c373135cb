from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import admin_required, json_body, login_required
from ..container import Container
from ..passes.service import pass_payload, render_pass_png, scan_value


def register(app: Flask, container: Container) -> None:
    @app.route("/me", endpoint="me")
    @login_required
    async def me():
        user = await container.student_service.get_user(session["uid"])
        return jsonify({**user.to_public(), "pass": pass_payload(user)})

    @app.route("/me/profile", methods=["POST"], endpoint="complete_profile")
    @login_required
    async def complete_profile():
        data = json_body()
        user = await container.student_service.complete_profile(
            session["uid"],
            student_id=data.get("studentId", ""),
            full_name=data.get("fullName", ""),
            department=data.get("department", ""),
            program=data.get("program", ""),
        )
        session["student_id"] = user.student_id
        session["name"] = user.name
        return jsonify({"success": True, "user": user.to_public()})

    @app.route("/me/pass.png", endpoint="my_pass")
    @login_required
    async def my_pass():
        user = await container.student_service.get_user(session["uid"])
        png = render_pass_png(scan_value(user))
        return app.response_class(png, mimetype="image/png")

    @app.route("/admin/students", endpoint="admin_students")
    @admin_required
    async def admin_students():
        students = await container.student_service.list_students(request.args.get("q", ""))
        registered = sum(1 for s in students if s.firebase_uid)
        return jsonify(
            {
                "students": [s.to_public() for s in students],
                "total": len(students),
                "registered": registered,
                "unregistered": len(students) - registered,
            }
        )

    @app.route("/admin/students/<user_id>", methods=["PATCH"], endpoint="admin_update_student")
    @admin_required
    async def admin_update_student(user_id: str):
        data = json_body()
        user = await container.student_service.admin_update(
            user_id,
            student_id=data.get("studentId"),
            display_name=data.get("displayName"),
            full_name=data.get("fullName"),
            email=data.get("email"),
            department=data.get("department"),
            program=data.get("program"),
        )
        return jsonify({"success": True, "user": user.to_public()})

    @app.route("/admin/students/<student_id>/history", endpoint="admin_student_history")
    @admin_required
    async def admin_student_history(student_id: str):
        history = await container.student_service.attendance_history(student_id)
        return jsonify({"studentId": student_id, "attendance": history})
