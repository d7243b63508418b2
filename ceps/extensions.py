# extensions.py
"""
Flask extensions initialization.
Extensions are created here without an app and bound to it in the application factory,
which keeps models and services free of circular imports.
"""

import logging
import threading
import time

from flask import current_app
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event, text

# Initialize extensions without app binding
db = SQLAlchemy()
migrate = Migrate()

# Connection monitoring
connection_stats = {
    'checks': 0,
    'failed_checks': 0,
    'last_check': 0,
    'healthy': True
}
connection_lock = threading.Lock()

logger = logging.getLogger(__name__)


def get_connection_stats():
    """
    Get current database connection statistics.

    Returns:
        dict: Connection statistics
    """
    with connection_lock:
        return connection_stats.copy()


def check_database_health():
    """
    Check if the database connection is healthy.
    This function requires an active Flask application context.

    Returns:
        tuple: (bool, str) indicating health status and message
    """
    try:
        if not current_app:
            return False, "No application context available"

        connection = db.engine.connect()
        try:
            connection.execute(text("SELECT 1")).fetchone()
        finally:
            connection.close()

        with connection_lock:
            connection_stats['checks'] += 1
            connection_stats['healthy'] = True
            connection_stats['last_check'] = time.time()

        return True, "Database connection is healthy"

    except Exception as e:
        logger.error(f"Database health check failed: {e}")

        with connection_lock:
            connection_stats['checks'] += 1
            connection_stats['failed_checks'] += 1
            connection_stats['healthy'] = False
            connection_stats['last_check'] = time.time()

        return False, f"Database connection failed: {str(e)}"


def enable_sqlite_foreign_keys(engine):
    """
    Enforce foreign keys on every new SQLite connection.
    SQLite ignores REFERENCES clauses unless the pragma is set per connection.

    Args:
        engine: SQLAlchemy engine instance
    """
    if engine.dialect.name != 'sqlite':
        return

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_extensions(app):
    """
    Initialize all extensions.

    Args:
        app: Flask application instance
    """
    db.init_app(app)
    migrate.init_app(app, db)

    with app.app_context():
        enable_sqlite_foreign_keys(db.engine)

    app.logger.info("Extensions initialized successfully")
