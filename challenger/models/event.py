from datetime import datetime
from sqlalchemy import UniqueConstraint
from challenger.extensions import db


class Event(db.Model):
    __tablename__ = "event"

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(160), nullable=False)

    # Short join code handed out to competitors, e.g. "K7Q2ZD"
    code = db.Column(db.String(16), nullable=False, unique=True)

    status = db.Column(db.String(20), nullable=False, default="DRAFT")  # DRAFT | ACTIVE | COMPLETED | CANCELLED

    is_team_event = db.Column(db.Boolean, nullable=False, default=False)
    # SUM | AVERAGE | BEST, only read when is_team_event
    team_scoring_method = db.Column(db.String(10), nullable=False, default="SUM")

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    participants = db.relationship(
        "EventParticipant",
        back_populates="event",
        lazy=True,
    )


class EventParticipant(db.Model):
    __tablename__ = "event_participant"

    id = db.Column(db.Integer, primary_key=True)

    event_id = db.Column(
        db.Integer,
        db.ForeignKey("event.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("user_profile.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # The one team this user competes for in this event
    team_id = db.Column(
        db.Integer,
        db.ForeignKey("team.id"),
        nullable=True,
    )

    joined_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    event = db.relationship("Event", back_populates="participants")
    user = db.relationship("UserProfile")
    team = db.relationship("Team")

    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_user"),
    )
