from datetime import datetime
from challenger.extensions import db

class ScoreRecord(db.Model):
    __tablename__ = "score_record"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("user_profile.id"),
        nullable=False,
        index=True,
    )

    activity_id = db.Column(
        db.String(40),
        nullable=False,
        index=True,
    )

    # kg for lifts, seconds for timed pieces, meters for distance
    raw_value = db.Column(db.Float, nullable=False)
    reps = db.Column(db.Integer, nullable=True)

    # NULL = personal submission outside any event
    event_id = db.Column(
        db.Integer,
        db.ForeignKey("event.id"),
        nullable=True,
        index=True,
    )

    # Admin verification; event submissions count as verified regardless
    verified = db.Column(db.Boolean, nullable=False, default=False)

    notes = db.Column(db.Text, nullable=True)

    submitted_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("UserProfile", back_populates="scores")
    event = db.relationship("Event", backref=db.backref("scores", lazy=True))
