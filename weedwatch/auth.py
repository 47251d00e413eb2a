"""Signup, login and bearer-token checks.

Passwords are hashed with Flask-Bcrypt (``BCRYPT_LOG_ROUNDS``) and tokens are
Flask-JWT-Extended access tokens whose identity is the user id.
"""
from flask import jsonify
from flask_bcrypt import Bcrypt
from flask_jwt_extended import JWTManager, create_access_token, decode_token, get_jwt_identity
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import ExpiredSignatureError, PyJWTError

from weedwatch import store
from weedwatch.errors import AuthError, Conflict, InvalidCredentials
from weedwatch.logging_config import get_logger

bcrypt = Bcrypt()
jwt = JWTManager()

logger = get_logger(__name__)


def signup(email, password):
    if store.find_user_by_email(email) is not None:
        raise Conflict("Email already exists")

    pw_hash = bcrypt.generate_password_hash(password).decode('utf-8')
    user = store.create_user(email, pw_hash)
    logger.info("Registered user %s", user.id)
    return user


def login(email, password):
    """Return a fresh access token for valid credentials."""
    user = store.find_user_by_email(email)
    if user is None or not bcrypt.check_password_hash(user.password_hash, password):
        raise InvalidCredentials("Invalid credentials")
    return create_access_token(identity=str(user.id))


MISSING_TOKEN = "Missing token"
INVALID_TOKEN = "Invalid token"
EXPIRED_TOKEN = "Token expired"


def authenticate(token):
    """Validate a raw token and return the user id bound to it.

    Raises ``AuthError`` with the same messages the protected routes answer
    with, so both paths reject a token identically.
    """
    if not token:
        raise AuthError(MISSING_TOKEN)
    try:
        claims = decode_token(token)
    except ExpiredSignatureError as e:
        raise AuthError(EXPIRED_TOKEN) from e
    except (PyJWTError, JWTExtendedException) as e:
        raise AuthError(INVALID_TOKEN) from e
    return int(claims["sub"])


def current_user_id():
    return int(get_jwt_identity())


# --- Token error rendering ------------------------------------------

@jwt.unauthorized_loader
def _missing_token(reason):
    return jsonify(AuthError(MISSING_TOKEN).to_dict()), AuthError.status_code


@jwt.invalid_token_loader
def _invalid_token(reason):
    return jsonify(AuthError(INVALID_TOKEN).to_dict()), AuthError.status_code


@jwt.expired_token_loader
def _expired_token(jwt_header, jwt_payload):
    return jsonify(AuthError(EXPIRED_TOKEN).to_dict()), AuthError.status_code
