from .api import api_bp
from .admin import admin_bp
from .events import events_bp
from .scores import scores_bp

def register_blueprints(app):
    app.register_blueprint(api_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(events_bp)
    app.register_blueprint(scores_bp)
