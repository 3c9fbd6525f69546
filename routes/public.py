"""
Public (anonymous) analysis route.

Stores the full record in the capped public collection but only returns
industry, sentiment and confidence to the caller.
"""

from flask import jsonify, request

from errors import PersistenceError, ValidationError
from models import Target
from . import public_bp, services


@public_bp.route("/api/public-analyze", methods=["POST"])
def public_analyze():
    """Classify an anonymous submission."""
    data = request.get_json(silent=True)

    try:
        record = services()["ingestion"].ingest(data, Target.PUBLIC)
    except ValidationError as e:
        return jsonify({"success": False, "message": str(e)}), 400
    except PersistenceError:
        return jsonify({
            "success": False,
            "message": "Analysis failed due to an internal error.",
        }), 500

    return jsonify({"success": True, "data": record.to_public_summary()})
