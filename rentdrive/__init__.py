# rentdrive/__init__.py
import os

import click
from flask import Flask
from flask_login import LoginManager
from flask_session import Session
from flask_sqlalchemy import SQLAlchemy

from config import Config

# Initialize extensions
db = SQLAlchemy()
login_manager = LoginManager()
server_session = Session()


# Create app factory
def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    from .logging_config import setup_logging
    setup_logging(app)

    db.init_app(app)
    server_session.init_app(app)

    login_manager.init_app(app)
    login_manager.login_view = 'main.login'
    login_manager.login_message = None

    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    from . import auth  # registers the user loader
    from .routes import bp, register_error_handlers
    app.register_blueprint(bp)
    register_error_handlers(app)

    @app.cli.command('init-db')
    def init_db():
        """Create the users, drivers, organizations and bookings tables."""
        from . import models  # noqa: F401
        db.create_all()
        click.echo('Database tables created.')

    app.logger.info('RentDrive started with pool options %s', app.config.get('SQLALCHEMY_ENGINE_OPTIONS'))
    return app
