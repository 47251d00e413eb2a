"""Database reads and writes, one function per operation.

SQLAlchemy failures are rolled back and re-raised as ``PersistenceError`` so
handlers never see driver exceptions.
"""
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from weedwatch.errors import Conflict, PersistenceError
from weedwatch.logging_config import get_logger
from weedwatch.models import db, DetectionLog, User, WaterLog

logger = get_logger(__name__)


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Database commit failed")
        raise PersistenceError() from e


def _query(fn):
    try:
        return fn()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Database query failed")
        raise PersistenceError() from e


# --- Users ----------------------------------------------------------

def find_user_by_email(email):
    return _query(lambda: User.query.filter_by(email=email).first())


def create_user(email, password_hash):
    user = User(email=email, password_hash=password_hash)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as e:
        # lost a race with a concurrent signup for the same email
        db.session.rollback()
        raise Conflict("Email already exists") from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Could not create user")
        raise PersistenceError() from e
    return user


# --- Detection logs -------------------------------------------------

def create_detection_log(user_id, result):
    log = DetectionLog(
        user_id=user_id,
        weed_count=result.weedCount,
        weeds_eliminated=result.weedsEliminated,
        success_rate=result.successRate,
        original_image_url=result.original_image_url,
        processed_image_url=result.processed_image_url,
    )
    db.session.add(log)
    _commit()
    return log


def list_detection_logs(user_id):
    return _query(lambda: (DetectionLog.query
                           .filter_by(user_id=user_id)
                           .order_by(DetectionLog.created_at.desc(), DetectionLog.id.desc())
                           .all()))


# --- Water logs -----------------------------------------------------

def create_water_log(user_id, success):
    log = WaterLog(user_id=user_id, success=success)
    db.session.add(log)
    _commit()
    return log


def list_water_logs(user_id):
    return _query(lambda: (WaterLog.query
                           .filter_by(user_id=user_id)
                           .order_by(WaterLog.created_at.desc(), WaterLog.id.desc())
                           .all()))


def delete_water_log(log_id, user_id):
    """Delete the log if ``user_id`` owns it. Returns False when nothing matched."""
    log = _query(lambda: WaterLog.query.filter_by(id=log_id, user_id=user_id).first())
    if log is None:
        return False
    db.session.delete(log)
    _commit()
    return True
