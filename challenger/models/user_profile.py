from datetime import datetime
from challenger.extensions import db

class UserProfile(db.Model):
    __tablename__ = "user_profile"

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=True, unique=True)

    # All three are required before any of this user's results can be scored
    sex = db.Column(db.String(1), nullable=True)  # "M" | "F"
    date_of_birth = db.Column(db.Date, nullable=True)
    bodyweight = db.Column(db.Float, nullable=True)  # kg

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    scores = db.relationship("ScoreRecord", back_populates="user", lazy=True)
    memberships = db.relationship("TeamMembership", back_populates="user", lazy=True)
