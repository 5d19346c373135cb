from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/events/<event_id>/attendance", endpoint="event_attendance")
    @admin_required
    async def event_attendance(event_id: str):
        day = request.args.get("day") or None
        records = await container.attendance_service.list_for_event(event_id, day)
        return jsonify({"eventId": event_id, "day": day, "attendance": [r.to_public() for r in records]})

    @app.route("/events/<event_id>/attendance.csv", endpoint="event_attendance_csv")
    @admin_required
    async def event_attendance_csv(event_id: str):
        export = await container.attendance_service.export_csv(event_id, day=request.args.get("day") or None)
        # BOM so spreadsheet apps pick up UTF-8 names
        return app.response_class(
            export.content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )
