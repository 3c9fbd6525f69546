"""
Waitlist signup route.
"""

from flask import jsonify, request

from errors import DuplicateError, PersistenceError, ValidationError
from . import waitlist_bp, services


@waitlist_bp.route("/api/waitlist", methods=["POST"])
def join_waitlist():
    """Add an email to the waitlist."""
    data = request.get_json(silent=True)

    try:
        services()["waitlist"].join(data)
    except DuplicateError as e:
        return jsonify({"success": False, "message": str(e)}), 409
    except ValidationError as e:
        return jsonify({"success": False, "message": str(e)}), 400
    except PersistenceError:
        return jsonify({
            "success": False,
            "message": "Failed to join waitlist due to an internal error.",
        }), 500

    return jsonify({"success": True, "message": "Successfully joined the waitlist!"}), 201
