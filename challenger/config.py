import os


def _split_env(name: str, default: str) -> frozenset:
    raw = os.getenv(name, default)
    return frozenset(p.strip() for p in raw.split(",") if p.strip())


class Config:
    raw_db_url = os.getenv("DATABASE_URL")

    if raw_db_url:
        if raw_db_url.startswith("postgres://"):
            raw_db_url = raw_db_url.replace("postgres://", "postgresql://", 1)
        SQLALCHEMY_DATABASE_URI = raw_db_url
    else:
        SQLALCHEMY_DATABASE_URI = "sqlite:///challenger.db"

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-dev-secret")

    # "module:attr" of a zero-arg factory returning {activity_id: scoring fn}
    SCORING_PROVIDER = os.getenv(
        "SCORING_PROVIDER",
        "challenger.scoring.providers:raw_value_provider",
    )

    # Activities left out of overall averaging (the 4-minute row by default)
    NON_CANONICAL_ACTIVITIES = _split_env("NON_CANONICAL_ACTIVITIES", "rowing_4min")

    TEAM_MEMBER_DISPLAY_LIMIT = int(os.getenv("TEAM_MEMBER_DISPLAY_LIMIT", "3"))

RESEND_API_KEY = os.getenv("RESEND_API_KEY", None)
RESEND_FROM_EMAIL = os.getenv("RESEND_FROM_EMAIL", "Challenger <noreply@challenger-events.com>")
APP_BASE_URL = os.getenv("APP_BASE_URL", "http://127.0.0.1:5000")
