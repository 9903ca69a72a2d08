# /app/__init__.py
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from .config import Config
from .logging_config import configure_logging

db = SQLAlchemy()


def create_app(config_class=Config):
    """Application factory function."""
    configure_logging(config_class.LOG_LEVEL, json_logs=config_class.JSON_LOGS)

    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)

    from .database_setup import init_database, register_commands
    register_commands(app)

    if app.config.get("RESET_DB_ON_START"):
        init_database(app)

    from .construction_stages import construction_stages_bp
    app.register_blueprint(construction_stages_bp)

    return app
