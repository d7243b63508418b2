import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration class with all settings as static attributes."""

    # Core configuration
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'ceps-dev-secret-key'
    DEBUG = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'
    VERSION = '1.0.0'
    SITE_NAME = 'College Event Portal'

    # Bearer token settings
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or SECRET_KEY
    JWT_ALGORITHM = os.environ.get('JWT_ALGORITHM', 'HS256')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=int(os.environ.get('JWT_EXPIRES_DAYS', 7)))

    # Database configuration
    base_db_uri = os.environ.get('DATABASE_URL')

    # Fallback to SQLite if no DATABASE_URL is provided
    if not base_db_uri:
        base_db_uri = 'sqlite:///ceps.db'

    # Some hosts still hand out the legacy postgres:// scheme
    if base_db_uri.startswith('postgres://'):
        base_db_uri = base_db_uri.replace('postgres://', 'postgresql://', 1)

    SQLALCHEMY_DATABASE_URI = base_db_uri

    # Disable track modifications for performance
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_recycle": 3600,  # Recycle connections after 1 hour
        "pool_pre_ping": True,  # Check connection health before use
    }

    # API settings
    API_PREFIX = os.environ.get('API_PREFIX', '/api')
    JSON_SORT_KEYS = False

    # Accounts
    PASSWORD_MIN_LENGTH = 6
    # Roles a visitor may pick on the public sign-up form
    SELF_REGISTRATION_ROLES = tuple(
        role.strip() for role in
        os.environ.get('SELF_REGISTRATION_ROLES', 'student').split(',')
        if role.strip()
    )

    # Logging
    LOG_TO_FILE = os.environ.get('LOG_TO_FILE', 'false').lower() == 'true'
    LOG_DIR = os.environ.get('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_ECHO = os.environ.get('SQL_DEBUG', 'false').lower() == 'true'


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False

    # Ensure secrets and database are set in production
    SECRET_KEY = os.environ.get('SECRET_KEY')
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')

    @classmethod
    def validate(cls):
        """Raise when a required production setting is missing."""
        missing = [
            key for key, value in (
                ('SECRET_KEY', cls.SECRET_KEY),
                ('JWT_SECRET_KEY', cls.JWT_SECRET_KEY),
                ('DATABASE_URL', cls.SQLALCHEMY_DATABASE_URI),
            )
            if not value
        ]
        if missing:
            raise ValueError(f"Missing required production settings: {', '.join(missing)}")


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = False
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET_KEY = 'test-jwt-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    API_PREFIX = '/api'
    SELF_REGISTRATION_ROLES = ('student',)
    LOG_TO_FILE = False


# Configuration dictionary
config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig
}
