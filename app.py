#!/usr/bin/env python3
"""
Family Tree - Flask application with JSON API and CLI commands
"""

import os

from flask import Flask

from family_tree.blueprints.members import members
from family_tree.blueprints.relationships import relationships
from family_tree.blueprints.tree import tree
from family_tree.commands import register_commands
from family_tree.database import init_app as init_database
from family_tree.error_handlers import register_error_handlers
from family_tree.shared.kinship import KinshipSettings
from family_tree.shared.models import Gender


class Config:
    """Configuration class for Flask app with required environment variables"""

    def __init__(self):
        # Flask configuration
        self.secret_key = self._require_env('SECRET_KEY')

        # Database configuration
        self.sqlalchemy_database_uri = self._require_env('DATABASE_URL')
        self.sqlalchemy_track_modifications = False

        # Account used when a request does not name one
        self.default_owner_id = os.environ.get('DEFAULT_OWNER_ID') or 'default'

        # Kinship inference
        defaults = KinshipSettings()
        self.kinship_settings = KinshipSettings(
            parent_min_age_gap=self._int_env('KINSHIP_PARENT_MIN_AGE_GAP', defaults.parent_min_age_gap),
            reference_birth_year=self._int_env('KINSHIP_REFERENCE_BIRTH_YEAR', defaults.reference_birth_year),
            primary_spouse_gender=self._gender_env('KINSHIP_PRIMARY_SPOUSE_GENDER',
                                                   defaults.primary_spouse_gender),
            max_tree_depth=self._int_env('KINSHIP_MAX_TREE_DEPTH', defaults.max_tree_depth),
        )

    def _require_env(self, var_name: str) -> str:
        """Require environment variable or raise error"""
        value = os.environ.get(var_name)
        if not value:
            raise RuntimeError(f"Required environment variable {var_name} is not set")
        return value

    def _int_env(self, var_name: str, default: int) -> int:
        value = os.environ.get(var_name)
        if not value:
            return default
        try:
            return int(value)
        except ValueError:
            raise RuntimeError(f"Environment variable {var_name} must be an integer, got {value!r}")

    def _gender_env(self, var_name: str, default: Gender) -> Gender:
        value = os.environ.get(var_name)
        if not value:
            return default
        try:
            return Gender(value.lower())
        except ValueError:
            raise RuntimeError(f"Environment variable {var_name} must be one of male, female, other")


def create_app(config=None):
    """Application factory"""
    app = Flask(__name__)

    # Initialize configuration
    if config is None:
        config = Config()

    # Set Flask config from our config object
    app.config['SECRET_KEY'] = config.secret_key
    app.config['SQLALCHEMY_DATABASE_URI'] = config.sqlalchemy_database_uri
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = config.sqlalchemy_track_modifications
    app.config['DEFAULT_OWNER_ID'] = getattr(config, 'default_owner_id', None) or 'default'
    app.config['KINSHIP_SETTINGS'] = getattr(config, 'kinship_settings', None) or KinshipSettings()
    app.config['TESTING'] = getattr(config, 'testing', False)

    # Register blueprints
    app.register_blueprint(members)
    app.register_blueprint(relationships)
    app.register_blueprint(tree)

    # Initialize database
    init_database(app)

    # Register error handlers and CLI commands
    register_error_handlers(app)
    register_commands(app)

    return app


def main_cli():
    """Development server entry point"""
    app = create_app()

    print("Family Tree")
    print("=" * 50)
    print("API available at: http://localhost:5000/api")
    print()

    app.run(debug=True, host='0.0.0.0', port=5000)


if __name__ == '__main__':
    main_cli()
