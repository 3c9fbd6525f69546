#!/usr/bin/env python3
"""
PainSignal API

Flask app that classifies pain point submissions with an LLM and stores
them in a document store.

Usage:
    python app.py                     # Serve on $PORT (default 3000)
    STORAGE_BACKEND=memory python app.py
"""

import atexit

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from classifier import Classifier
from config import Settings
from pipeline import IngestionService, WaitlistService
from repositories import Repository, get_repository
from routes import painpoints_bp, public_bp, waitlist_bp
from utils.logging import get_logger, init_logging
from workers import NotificationSink

logger = get_logger(__name__)


def create_app(
    settings: Settings = None,
    repository: Repository = None,
    classifier: Classifier = None,
    notifier: NotificationSink = None,
) -> Flask:
    """
    Build the Flask app.

    Every collaborator can be injected; anything omitted is built from
    settings (which default to the environment).
    """
    settings = settings or Settings.from_env()
    init_logging(settings.log_level)

    app = Flask(__name__)

    repository = repository or get_repository(settings)
    classifier = classifier or Classifier(settings)
    notifier = notifier or NotificationSink(settings)

    app.extensions["painsignal"] = {
        "settings": settings,
        "repository": repository,
        "classifier": classifier,
        "notifier": notifier,
        "ingestion": IngestionService(settings, repository, classifier, notifier=notifier),
        "waitlist": WaitlistService(repository.waitlist),
    }

    app.register_blueprint(painpoints_bp)
    app.register_blueprint(public_bp)
    app.register_blueprint(waitlist_bp)

    @app.route("/")
    def index():
        return "Pain Point Aggregator API is running"

    @app.errorhandler(Exception)
    def unexpected_error(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error")
        return jsonify({"success": False, "message": "Internal server error"}), 500

    if settings.notifications_enabled:
        notifier.start()
        atexit.register(notifier.stop)
    else:
        logger.warning(
            "Email configuration (RESEND_API_KEY, EMAIL_FROM, EMAIL_TO) missing. "
            "Notifications disabled."
        )

    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set; every submission will get the default classification")

    logger.info(
        "PainSignal ready (backend=%s, environment=%s)",
        settings.storage_backend,
        settings.environment,
    )
    return app


if __name__ == "__main__":
    settings = Settings.from_env()
    app = create_app(settings)
    app.run(host="0.0.0.0", port=settings.port)
