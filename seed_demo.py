# seed_demo.py
import random
from datetime import date, datetime, timedelta

from dotenv import load_dotenv

load_dotenv()

from challenger import create_app
from challenger.extensions import db
from challenger.models import Event, EventParticipant, ScoreRecord, Team, TeamMembership, UserProfile
from challenger.scoring.activities import ACTIVITIES, WEIGHT, TIME

TEAM_NAMES = ["Iron Lungs", "Chalk & Cheese", "Split Squad", "Erg Nerds"]


def random_value(activity) -> float:
    if activity.input_type == WEIGHT:
        return float(random.randrange(40, 220, 5))
    if activity.input_type == TIME:
        return round(random.uniform(45, 480), 1)
    return float(random.randint(900, 1300))


def main(num_users=60):
    app = create_app()
    with app.app_context():
        db.create_all()

        existing = UserProfile.query.count()
        print(f"Existing users: {existing}")

        users = []
        for i in range(num_users):
            n = existing + i + 1
            u = UserProfile(
                name=f"Test Competitor {n}",
                email=f"competitor{n}@example.com",
                sex=random.choice(["M", "F"]),
                date_of_birth=date(1970, 1, 1) + timedelta(days=random.randint(0, 365 * 35)),
                # every tenth user is left incomplete so "Not set" shows up
                bodyweight=None if n % 10 == 0 else round(random.uniform(55, 110), 1),
            )
            db.session.add(u)
            users.append(u)
        db.session.flush()

        teams = [Team(name=name) for name in TEAM_NAMES]
        db.session.add_all(teams)
        db.session.flush()

        event = Event(
            name="Demo Challenger Open",
            code=f"DEMO{existing:02d}"[:16],
            status="ACTIVE",
            is_team_event=True,
            team_scoring_method="SUM",
        )
        db.session.add(event)
        db.session.flush()

        now = datetime.utcnow()
        for idx, u in enumerate(users):
            team = teams[idx % len(teams)]
            role = "CAPTAIN" if idx < len(teams) else "MEMBER"
            db.session.add(TeamMembership(team_id=team.id, user_id=u.id, role=role))
            db.session.add(EventParticipant(event_id=event.id, user_id=u.id, team_id=team.id))

            for activity in random.sample(ACTIVITIES, k=random.randint(2, len(ACTIVITIES))):
                db.session.add(
                    ScoreRecord(
                        user_id=u.id,
                        activity_id=activity.id,
                        raw_value=random_value(activity),
                        reps=random.choice([1, 1, 3, 5]) if activity.supports_reps else None,
                        event_id=event.id,
                        submitted_at=now - timedelta(minutes=random.randint(0, 600)),
                    )
                )

        db.session.commit()
        print(f"Now have {UserProfile.query.count()} users in the DB.")
        print(f"Seeded event {event.id} ({event.code}) with {len(teams)} teams.")


if __name__ == "__main__":
    main()
