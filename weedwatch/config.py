import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MB


def _optional_float(value):
    if value is None or value.strip() == "":
        return None
    return float(value)


def load_config():
    """Build the Flask config mapping from the environment."""
    return dict(
        SQLALCHEMY_DATABASE_URI=os.getenv("DATABASE_URL", "sqlite:///weedwatch.db"),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        JWT_SECRET_KEY=os.getenv("JWT_SECRET", "super-secret-key-please-change"),
        JWT_ACCESS_TOKEN_EXPIRES=timedelta(hours=1),
        BCRYPT_LOG_ROUNDS=10,
        BCRYPT_HANDLE_LONG_PASSWORDS=True,
        UPSTREAM_URL=os.getenv("UPSTREAM_URL", os.getenv("FASTAPI_URL", "http://localhost:8000")),
        UPSTREAM_TIMEOUT=_optional_float(os.getenv("UPSTREAM_TIMEOUT")),
        UPLOAD_FOLDER=os.getenv("UPLOAD_FOLDER", "uploads"),
        MAX_CONTENT_LENGTH=MAX_UPLOAD_BYTES,
        PORT=int(os.getenv("PORT", "3000")),
        DEBUG_MODE=os.getenv("FLASK_DEBUG", "False").lower() == "true",
        LOG_LEVEL=os.getenv("LOG_LEVEL"),
    )
