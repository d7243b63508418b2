# __init__.py
"""
Application factory for the college event portal API.
This module creates and configures the Flask application using the application factory pattern.
"""

import os
import logging
from logging.handlers import RotatingFileHandler

from flask import Flask, jsonify
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

from ceps.config import config_by_name
from ceps.errors import CEPSError
from ceps.extensions import init_extensions, db
from ceps.models.base import utcnow

APP_LOGGERS = (
    'events',
    'auth_service',
    'user_service',
    'event_service',
    'attendance_service',
    'trainer_service',
    'feedback_service',
    'notification_service',
)


def setup_logging(app):
    """
    Configure structured logging for the application.

    Args:
        app: Flask application instance
    """
    log_format = logging.Formatter(
        '%(asctime)s %(levelname)s %(name)s %(threadName)s : %(message)s'
    )
    level = logging.DEBUG if app.debug else logging.INFO

    handlers = []

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(log_format)
    console_handler.setLevel(level)
    handlers.append(console_handler)

    # File handler with rotation
    if app.config.get('LOG_TO_FILE'):
        log_dir = app.config.get('LOG_DIR') or os.path.join(app.root_path, 'logs')
        os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'app.log'),
            maxBytes=1024 * 1024 * 10,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(log_format)
        file_handler.setLevel(logging.INFO)
        handlers.append(file_handler)

    app.logger.setLevel(level)
    app.logger.handlers = list(handlers)

    # Route and service loggers share the application handlers
    for name in APP_LOGGERS:
        named_logger = logging.getLogger(name)
        named_logger.setLevel(level)
        named_logger.handlers = list(handlers)
        named_logger.propagate = False

    # Suppress excessive SQLAlchemy logging
    sa_logger = logging.getLogger('sqlalchemy.engine')
    sa_logger.setLevel(logging.WARNING)
    sa_logger.propagate = False


def register_blueprints(app):
    """
    Register all application blueprints under the API prefix.

    Args:
        app: Flask application instance
    """
    from .controllers.auth import auth_bp
    from .controllers.users import users_bp
    from .controllers.events import events_bp
    from .controllers.attendance import attendance_bp
    from .controllers.trainers import trainers_bp
    from .controllers.feedback import feedback_bp
    from .controllers.notifications import notifications_bp
    from .controllers.dashboard import dashboard_bp, analytics_bp

    prefix = app.config.get('API_PREFIX', '/api').rstrip('/')

    app.register_blueprint(auth_bp, url_prefix=f'{prefix}/auth')
    app.register_blueprint(users_bp, url_prefix=f'{prefix}/user')
    app.register_blueprint(events_bp, url_prefix=f'{prefix}/events')
    app.register_blueprint(attendance_bp, url_prefix=f'{prefix}/attendance')
    app.register_blueprint(trainers_bp, url_prefix=f'{prefix}/trainers')
    app.register_blueprint(feedback_bp, url_prefix=f'{prefix}/feedback')
    app.register_blueprint(notifications_bp, url_prefix=f'{prefix}/notifications')
    app.register_blueprint(dashboard_bp, url_prefix=f'{prefix}/dashboard')
    app.register_blueprint(analytics_bp, url_prefix=f'{prefix}/analytics')

    app.logger.info("All blueprints registered successfully")


def register_error_handlers(app):
    """
    Register global error handlers. Every error leaves as a JSON envelope.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(CEPSError)
    def handle_service_error(e):
        if e.status_code >= 500:
            app.logger.error(f"Service error: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({
            'success': False,
            'message': e.description,
            'error_code': e.name.lower().replace(' ', '_')
        }), e.code

    @app.errorhandler(Exception)
    def handle_exception(e):
        db.session.rollback()
        app.logger.error(f"Unhandled exception: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'message': str(e) if app.debug else 'Internal Server Error. Please try again later.',
            'error_code': 'internal_error'
        }), 500


def register_shell_context(app):
    """
    Register shell context for flask shell command.

    Args:
        app: Flask application instance
    """

    @app.shell_context_processor
    def make_shell_context():
        from ceps.models import (
            User, Event, EventRegistration, Attendance, Trainer, Feedback, Notification
        )
        return {
            'db': db,
            'User': User,
            'Event': Event,
            'EventRegistration': EventRegistration,
            'Attendance': Attendance,
            'Trainer': Trainer,
            'Feedback': Feedback,
            'Notification': Notification
        }


def register_health_checks(app):
    """
    Register health check endpoints.

    Args:
        app: Flask application instance
    """

    @app.route('/')
    def index():
        return jsonify({
            'success': True,
            'message': f"{app.config.get('SITE_NAME', 'College Event Portal')} API is running"
        })

    @app.route('/health')
    def health_check():
        """Basic health check endpoint."""
        return jsonify({
            'status': 'ok',
            'timestamp': utcnow().isoformat(),
            'version': app.config.get('VERSION', '1.0.0')
        })

    @app.route('/health/database')
    def database_health_check():
        """Database health check endpoint."""
        from ceps.extensions import check_database_health, get_connection_stats

        healthy, message = check_database_health()
        stats = get_connection_stats()

        return jsonify({
            'status': 'healthy' if healthy else 'unhealthy',
            'message': message,
            'stats': stats,
            'timestamp': utcnow().isoformat()
        }), 200 if healthy else 503


def create_app(config_name=None):
    """
    Application factory function.

    Args:
        config_name (str): Configuration name ('development', 'production', 'testing')

    Returns:
        Flask: Configured Flask application instance
    """
    # Load environment variables
    load_dotenv()

    app = Flask(__name__)

    # Load configuration
    config_name = config_name or os.environ.get('FLASK_ENV', 'development')
    config_class = config_by_name[config_name]
    if hasattr(config_class, 'validate'):
        config_class.validate()
    app.config.from_object(config_class)

    app.json.sort_keys = app.config.get('JSON_SORT_KEYS', False)

    # Setup logging first
    setup_logging(app)
    app.logger.info(f"Starting application with config: {config_name}")

    # Import models so their tables are registered on the metadata
    from ceps import models  # noqa: F401

    init_extensions(app)

    register_blueprints(app)
    register_error_handlers(app)
    register_shell_context(app)
    register_health_checks(app)

    # Register CLI commands
    from .cli import register_cli_commands
    register_cli_commands(app)

    app.logger.info("Application factory completed successfully")

    return app
