from datetime import date, datetime

import pytest

from challenger import create_app
from challenger.config import Config
from challenger.extensions import db
from challenger.helpers.leaderboard_cache import invalidate_leaderboard_cache
from challenger.models import Event, UserProfile
from challenger.scoring import ScoreCalculator
from challenger.scoring.providers import raw_value_provider
from challenger.scoring.totals import ScoredResult


class TestConfig(Config):
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    TESTING = True
    SECRET_KEY = 'test-secret'
    SQLALCHEMY_ENGINE_OPTIONS = {'connect_args': {'check_same_thread': False}}
    SCORING_PROVIDER = 'challenger.scoring.providers:raw_value_provider'
    NON_CANONICAL_ACTIVITIES = frozenset({'rowing_4min'})
    TEAM_MEMBER_DISPLAY_LIMIT = 3


@pytest.fixture(autouse=True)
def clear_leaderboard_cache():
    invalidate_leaderboard_cache()
    yield
    invalidate_leaderboard_cache()


@pytest.fixture
def app():
    app = create_app(TestConfig, provider=raw_value_provider())
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    with client.session_transaction() as sess:
        sess['admin_ok'] = True
    return client


@pytest.fixture
def calculator():
    return ScoreCalculator(raw_value_provider())


def make_user(name='Alex', sex='M', dob=date(1990, 1, 1), bodyweight=80.0, email=None):
    user = UserProfile(
        name=name,
        email=email or f'{name.lower().replace(" ", ".")}@example.com',
        sex=sex,
        date_of_birth=dob,
        bodyweight=bodyweight,
    )
    db.session.add(user)
    db.session.commit()
    return user


def make_event(name='Open', code='OPEN1', status='ACTIVE', is_team_event=False, method='SUM'):
    event = Event(
        name=name,
        code=code,
        status=status,
        is_team_event=is_team_event,
        team_scoring_method=method,
    )
    db.session.add(event)
    db.session.commit()
    return event


def result(user_id, activity_id, score, verified=True, submitted_at=None, record_id=None,
           raw_value=None, reps=None, event_id=None):
    """ScoredResult shortcut for engine tests."""
    return ScoredResult(
        record_id=record_id if record_id is not None else f'{user_id}-{activity_id}-{score}',
        user_id=user_id,
        activity_id=activity_id,
        raw_value=raw_value if raw_value is not None else score,
        reps=reps,
        event_id=event_id,
        verified=verified,
        submitted_at=submitted_at or datetime(2024, 5, 1, 9, 0),
        score=score,
        percentile=50,
    )
