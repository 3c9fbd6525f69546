"""
Primary pain point API routes.

The un-prefixed paths are kept for older clients.
"""

from flask import jsonify, request

from errors import PersistenceError, ValidationError
from models import Target
from . import painpoints_bp, services


@painpoints_bp.route("/api/painpoints", methods=["POST"])
@painpoints_bp.route("/painpoints", methods=["POST"])
def create_painpoint():
    """Classify and store a pain point."""
    data = request.get_json(silent=True)

    try:
        record = services()["ingestion"].ingest(data, Target.PRIMARY)
    except ValidationError as e:
        return jsonify({"success": False, "message": str(e)}), 400
    except PersistenceError:
        return jsonify({"success": False, "message": "Failed to save pain point"}), 500

    return jsonify({"success": True, "data": record.to_public()}), 201


@painpoints_bp.route("/api/painpoints")
@painpoints_bp.route("/painpoints")
def list_painpoints():
    """List stored pain points ([test] entries only in development)."""
    try:
        records = services()["ingestion"].list_records()
    except PersistenceError as e:
        return jsonify({
            "success": False,
            "message": "Failed to retrieve pain points",
            "error": str(e),
        }), 500

    data = [r.to_listing() for r in records]
    return jsonify({"success": True, "count": len(data), "data": data})


@painpoints_bp.route("/api/recent-painpoints")
@painpoints_bp.route("/recent-painpoints")
def recent_painpoints():
    """Newest pain points first."""
    try:
        records = services()["ingestion"].recent_records()
    except PersistenceError as e:
        return jsonify({
            "success": False,
            "message": "Failed to retrieve recent pain points",
            "error": str(e),
        }), 500

    data = [r.to_listing() for r in records]
    return jsonify({"success": True, "count": len(data), "data": data})
