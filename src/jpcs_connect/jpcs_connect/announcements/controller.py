from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import admin_required, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/announcements", methods=["GET"], endpoint="list_announcements")
    @login_required
    async def list_announcements():
        items = await container.announcement_service.list_recent()
        return jsonify({"announcements": [a.to_public() for a in items]})

    @app.route("/announcements", methods=["POST"], endpoint="create_announcement")
    @admin_required
    async def create_announcement():
        data = json_body()
        announcement_id = await container.announcement_service.create(
            title=data.get("title", ""),
            message=data.get("message", ""),
            author=session.get("name", "Admin"),
            priority=data.get("priority", "normal"),
            recipients=data.get("recipients", "all"),
        )
        return jsonify({"success": True, "id": announcement_id}), 201

    @app.route("/announcements/<announcement_id>", methods=["DELETE"], endpoint="delete_announcement")
    @admin_required
    async def delete_announcement(announcement_id: str):
        await container.announcement_service.delete(announcement_id)
        return jsonify({"success": True})

    @app.route("/announcements/<announcement_id>/view", methods=["POST"], endpoint="view_announcement")
    @login_required
    async def view_announcement(announcement_id: str):
        views = await container.announcement_service.record_view(announcement_id)
        return jsonify({"success": True, "views": views})
