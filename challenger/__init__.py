from flask import Flask
from werkzeug.utils import import_string

from .config import Config
from .extensions import db
from .scoring.calculator import ScoreCalculator


def create_app(config_class=Config, provider=None):
    """
    Build the Flask app.

    The scoring provider is resolved once here and attached to the app as a
    ScoreCalculator; pass `provider` to bypass SCORING_PROVIDER (tests).
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)

    if provider is None:
        provider = import_string(app.config["SCORING_PROVIDER"])()

    app.extensions["score_calculator"] = ScoreCalculator(provider)

    from .routes import register_blueprints
    register_blueprints(app)

    return app
