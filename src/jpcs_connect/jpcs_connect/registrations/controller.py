from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import admin_required, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/events/<event_id>/registrations", methods=["POST"], endpoint="register_for_event")
    @login_required
    async def register_for_event(event_id: str):
        user = await container.student_service.get_user(session["uid"])
        if not user.student_id:
            raise ValidationError("Complete your profile before registering for events")
        registration_id = await container.registration_service.register(event_id, user.student_id, user.name)
        return jsonify({"success": True, "id": registration_id}), 201

    @app.route("/events/<event_id>/registrations", methods=["GET"], endpoint="list_registrants")
    @admin_required
    async def list_registrants(event_id: str):
        registrants = await container.registration_service.list_registrants(event_id)
        return jsonify({"eventId": event_id, "registrants": [r.to_public() for r in registrants]})
