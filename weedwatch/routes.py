import os
import uuid

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.utils import secure_filename

from weedwatch import auth, store, upstream
from weedwatch.errors import APIError, NotFound, PersistenceError, UpstreamError, ValidationError
from weedwatch.logging_config import get_logger
from weedwatch.schemas import parse_credentials

api = Blueprint("api", __name__)
logger = get_logger(__name__)


@api.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})

# --- Auth Endpoints -------------------------------------------------

@api.route("/signup", methods=["POST"])
def signup():
    creds = parse_credentials(request.get_json(silent=True))
    auth.signup(creds.email, creds.password)
    return jsonify({"message": "User created successfully"}), 201


@api.route("/login", methods=["POST"])
def login():
    creds = parse_credentials(request.get_json(silent=True))
    token = auth.login(creds.email, creds.password)
    return jsonify({"token": token})

# --- Detection logs -------------------------------------------------

def _save_upload(image):
    folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(folder, exist_ok=True)
    _, ext = os.path.splitext(secure_filename(image.filename or ""))
    path = os.path.join(folder, uuid.uuid4().hex + ext)
    image.save(path)
    return path


def _remove_upload(path):
    try:
        os.remove(path)
    except OSError as e:
        logger.error("Temp file cleanup error: %s", e)
    else:
        logger.info("Temp file cleaned up")


@api.route("/logs", methods=["POST"])
@jwt_required()
def create_log():
    logger.info("Received request at /logs")

    images = request.files.getlist("image")
    if not images or not images[0].filename:
        logger.info("No image uploaded")
        raise ValidationError("No image uploaded")
    if len(images) > 1:
        raise ValidationError("Only one image may be uploaded")

    temp_path = _save_upload(images[0])
    logger.info("Temp file path: %s", temp_path)
    try:
        result = upstream.detect(temp_path)
        logger.info("Saving log to database")
        log = store.create_detection_log(auth.current_user_id(), result)
        logger.info("Log saved to database")
    except APIError:
        logger.exception("Error in /logs endpoint")
        raise
    finally:
        _remove_upload(temp_path)

    return jsonify(log.to_dict()), 201


@api.route("/logs", methods=["GET"])
@jwt_required()
def list_logs():
    logs = store.list_detection_logs(auth.current_user_id())
    return jsonify([log.to_dict() for log in logs])

# --- Water logs -----------------------------------------------------

@api.route("/water", methods=["POST"])
@jwt_required()
def create_water_log():
    user_id = auth.current_user_id()
    try:
        success = upstream.water()
        log = store.create_water_log(user_id, success)
    except (UpstreamError, PersistenceError) as e:
        logger.exception("Water log error")
        raise APIError("Watering failed") from e
    return jsonify(log.to_dict()), 201


@api.route("/water", methods=["GET"])
@jwt_required()
def list_water_logs():
    logs = store.list_water_logs(auth.current_user_id())
    return jsonify([log.to_dict() for log in logs])


@api.route("/water/<log_id>", methods=["DELETE"])
@jwt_required()
def delete_water_log(log_id):
    # a malformed id and someone else's id look the same as a missing one
    try:
        log_id = int(log_id)
    except ValueError:
        raise NotFound("Log not found")

    if not store.delete_water_log(log_id, auth.current_user_id()):
        raise NotFound("Log not found")
    return jsonify({"message": "Log deleted successfully"})
