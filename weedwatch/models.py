from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def utcnow():
    return datetime.now(timezone.utc)


def _iso(ts):
    if ts is None:
        return None
    if ts.tzinfo is None:
        # SQLite hands back naive datetimes
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.isoformat().replace("+00:00", "Z")


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(128), nullable=False)
    detection_logs = db.relationship('DetectionLog', backref='owner', lazy=True)
    water_logs = db.relationship('WaterLog', backref='owner', lazy=True)


class DetectionLog(db.Model):
    __tablename__ = "detection_log"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    weed_count = db.Column(db.Integer, nullable=False)
    weeds_eliminated = db.Column(db.Integer, nullable=False)
    success_rate = db.Column(db.Float, nullable=False)
    original_image_url = db.Column(db.String(2048), nullable=False)
    processed_image_url = db.Column(db.String(2048), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "user": self.user_id,
            "weedCount": self.weed_count,
            "weedsEliminated": self.weeds_eliminated,
            "successRate": self.success_rate,
            "original_image_url": self.original_image_url,
            "processed_image_url": self.processed_image_url,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class WaterLog(db.Model):
    __tablename__ = "water_log"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    success = db.Column(db.Boolean, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "user": self.user_id,
            "success": self.success,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }
