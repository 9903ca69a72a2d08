# /app/database_setup.py
import click
import structlog

from app import db
# Models must be imported here so SQLAlchemy knows about their tables
from .construction_stages.models import ConstructionStage  # noqa: F401

logger = structlog.get_logger(__name__)


def init_database(app):
    """Drops every table and creates them again."""
    with app.app_context():
        logger.info("database_reset_started", uri=app.config["SQLALCHEMY_DATABASE_URI"])
        db.drop_all()
        db.create_all()
        logger.info("database_reset_finished")


def register_commands(app):
    @app.cli.command("init-db")
    def init_db_command():
        """Recreate the construction_stages table (all rows are lost)."""
        init_database(app)
        click.echo("Database has been reset.")
