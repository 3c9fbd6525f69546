"""
Flask blueprints for the PainSignal API.
"""

from flask import Blueprint, current_app

# Create blueprints
painpoints_bp = Blueprint('painpoints', __name__)
public_bp = Blueprint('public', __name__)
waitlist_bp = Blueprint('waitlist', __name__)


def services() -> dict:
    """Services wired into the app by create_app()."""
    return current_app.extensions["painsignal"]


# Import routes to register them
from . import painpoints
from . import public
from . import waitlist
