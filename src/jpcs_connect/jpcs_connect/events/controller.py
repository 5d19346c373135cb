from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/events", methods=["GET"], endpoint="list_events")
    @login_required
    async def list_events():
        events = await container.event_service.list_events()
        counts = await container.registration_service.count_by_event()
        return jsonify(
            {"events": [{**e.to_public(), "registrants": counts.get(e.event_id, 0)} for e in events]}
        )

    @app.route("/events", methods=["POST"], endpoint="create_event")
    @admin_required
    async def create_event():
        data = json_body()
        event_id = await container.event_service.create_event(
            name=data.get("name", ""),
            date=data.get("date", ""),
            start_time=data.get("startTime", ""),
            end_time=data.get("endTime"),
            location=data.get("location", ""),
            description=data.get("description", ""),
            days=data.get("days") or [],
        )
        return jsonify({"success": True, "id": event_id}), 201

    @app.route("/events/<event_id>", methods=["PATCH"], endpoint="update_event")
    @admin_required
    async def update_event(event_id: str):
        data = json_body()
        names = {
            "name": "name",
            "description": "description",
            "date": "date",
            "startTime": "start_time",
            "endTime": "end_time",
            "location": "location",
            "days": "days",
        }
        changes = {names[k]: v for k, v in data.items() if k in names}
        event = await container.event_service.update_event(event_id, **changes)
        if "status" in data:
            event = await container.event_service.change_status(event_id, str(data["status"]))
        return jsonify({"success": True, "event": event.to_public()})

    @app.route("/events/<event_id>/status", methods=["POST"], endpoint="change_event_status")
    @admin_required
    async def change_event_status(event_id: str):
        event = await container.event_service.change_status(event_id, str(json_body().get("status", "")))
        return jsonify({"success": True, "event": event.to_public()})

    @app.route("/events/<event_id>", methods=["DELETE"], endpoint="delete_event")
    @admin_required
    async def delete_event(event_id: str):
        await container.event_service.delete_event(event_id)
        return jsonify({"success": True})
