from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required
from ..container import Container
from ..core.constants import DEFAULT_TOP_EVENTS


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/analytics", endpoint="admin_analytics")
    @admin_required
    async def admin_analytics():
        top_n = request.args.get("top", DEFAULT_TOP_EVENTS, type=int)
        dashboard = await container.analytics_service.dashboard(top_n=max(top_n, 0))
        return jsonify(dashboard.to_public())
