"""
Database configuration and models for the family tree
"""

from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()
migrate = Migrate()


def init_db():
    """Create all tables (used by the init-db command and tests)"""
    from family_tree.database import models  # noqa: F401

    db.create_all()


def init_app(app):
    """Initialize database extensions with Flask app"""
    db.init_app(app)
    migrate.init_app(app, db)

    # Import all models to ensure they're registered with SQLAlchemy
    from family_tree.database import models  # noqa: F401
