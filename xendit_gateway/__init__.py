from flask import Flask
from flask_migrate import Migrate
from .models import db


def create_app(config_object='config.DevConfig'):
    app = Flask(__name__, instance_relative_config=False)
    app.config.from_object(config_object)

    # Init extensions
    db.init_app(app)
    Migrate(app, db)

    if not (app.config.get('XENDIT_API_KEY') or '').strip():
        app.logger.warning('Xendit not fully configured: missing XENDIT_API_KEY env var.')
    if not app.config.get('GW_CALLBACK_URL'):
        app.logger.warning('GW_CALLBACK_URL not set; Xendit callbacks will use a relative URL.')

    # Register blueprints
    from .routes import xendit_bp
    app.register_blueprint(xendit_bp)

    return app
