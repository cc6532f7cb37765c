from datetime import datetime, timezone
from sqlalchemy import UniqueConstraint
from challenger.extensions import db

class Team(db.Model):
    __tablename__ = "team"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    memberships = db.relationship("TeamMembership", back_populates="team", lazy=True)


class TeamMembership(db.Model):
    __tablename__ = "team_membership"

    id = db.Column(db.Integer, primary_key=True)
    team_id = db.Column(db.Integer, db.ForeignKey("team.id", ondelete="CASCADE"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("user_profile.id", ondelete="CASCADE"), nullable=False)

    role = db.Column(db.String(10), nullable=False, default="MEMBER")  # 'CAPTAIN','MEMBER'
    joined_at = db.Column(db.DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    team = db.relationship("Team", back_populates="memberships")
    user = db.relationship("UserProfile", back_populates="memberships")

    __table_args__ = (
        UniqueConstraint("team_id", "user_id", name="uq_team_user"),
    )
