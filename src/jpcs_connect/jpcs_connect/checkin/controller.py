from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, error_response, json_body
from ..container import Container
from ..passes.service import decode_qr_image


def register(app: Flask, container: Container) -> None:
    @app.route("/events/<event_id>/checkin", methods=["POST"], endpoint="checkin")
    @admin_required
    async def checkin(event_id: str):
        data = json_body()
        result = await container.checkin_service.check_in(event_id, data.get("code"), day=data.get("day"))
        return jsonify(result.to_public())

    @app.route("/events/<event_id>/checkin/image", methods=["POST"], endpoint="checkin_image")
    @admin_required
    async def checkin_image(event_id: str):
        if "image" not in request.files:
            return error_response("No image uploaded", 400)

        code = decode_qr_image(request.files["image"].read())
        result = await container.checkin_service.check_in(event_id, code, day=request.form.get("day"))
        return jsonify(result.to_public())
