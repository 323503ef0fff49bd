from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from .model import SyncOptions
from .orchestrator import NOT_CONFIGURED_MESSAGE


def register(app: Flask, container) -> None:
    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Authentication required"}), 401
            if session.get("role") != Role.ADMIN.value:
                return jsonify({"success": False, "message": "Forbidden"}), 403
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/attendance/device-sync", methods=["POST"], endpoint="device_sync")
    @admin_required
    def device_sync():
        orchestrator = container.sync_orchestrator
        if not orchestrator.is_configured():
            return jsonify({"success": False, "message": NOT_CONFIGURED_MESSAGE}), 400

        options = SyncOptions.from_trigger(
            mode=request.args.get("mode"),
            days=request.args.get("days"),
            from_value=request.args.get("from"),
            tz_offset_minutes=orchestrator.settings.tz_offset_minutes,
        )
        result = orchestrator.run_pass(options)

        if result.already_running:
            return jsonify({"success": False, "message": result.message, "data": result.to_dict()}), 409
        if not result.success:
            return jsonify({
                "success": False,
                "message": result.message or "Failed to sync device logs",
                "data": result.to_dict(),
            }), 500
        return jsonify({"success": True, "message": result.message, "data": result.to_dict()}), 200

    @app.route("/api/attendance/device-sync/state", methods=["GET"], endpoint="device_sync_state")
    @admin_required
    def device_sync_state():
        states = container.sync_state_repo.list_all()
        return jsonify({"success": True, "data": [s.to_dict() for s in states]}), 200
