from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from weedwatch.auth import bcrypt, jwt
from weedwatch.config import load_config
from weedwatch.errors import APIError
from weedwatch.logging_config import get_logger, setup_logging
from weedwatch.models import db
from weedwatch.routes import api

logger = get_logger(__name__)


def create_app(overrides=None):
    """Application factory. ``overrides`` is merged over the environment config."""
    app = Flask(__name__)
    app.config.update(load_config())
    if overrides:
        app.config.update(overrides)

    setup_logging(debug=app.config["DEBUG_MODE"], level=app.config.get("LOG_LEVEL"))

    db.init_app(app)
    bcrypt.init_app(app)
    jwt.init_app(app)
    CORS(app)

    app.register_blueprint(api)
    register_error_handlers(app)
    return app


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(e):
        if request.mimetype == "multipart/form-data":
            return jsonify({"error": "File too large"}), 400
        return jsonify({"error": "Request too large"}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500


def init_db(app):
    with app.app_context():
        db.create_all()


def main():
    app = create_app()
    try:
        init_db(app)
        logger.info("Database tables created (if they didn't exist).")
    except Exception as e:
        logger.error("Error during initial db setup: %s", e)
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=app.config["DEBUG_MODE"])


if __name__ == "__main__":
    main()
