import os
from datetime import timedelta


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///ptconnect.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'your-secret-key-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)
    JWT_TOKEN_LOCATION = ['headers', 'cookies']
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"
    JWT_COOKIE_SECURE = True
    JWT_COOKIE_CSRF_PROTECT = True
    JWT_COOKIE_SAMESITE = 'Lax'

    # CORS
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:3000').split(',')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE', 'logs/app.log')

    # Scheduler
    SCHEDULER_ENABLED = _env_flag('SCHEDULER_ENABLED', True)
    SCHEDULER_API_ENABLED = False
    HEALTH_ALERT_SWEEP_MINUTES = int(os.getenv('HEALTH_ALERT_SWEEP_MINUTES', '5'))

    # Aggregation policy
    ROUTINE_VIEW_DEFAULT_REPS = os.getenv('ROUTINE_VIEW_DEFAULT_REPS', '10')
    ROUTINE_VIEW_DEFAULT_REST = os.getenv('ROUTINE_VIEW_DEFAULT_REST', '')
    HEALTH_ALERT_WINDOW_MINUTES = int(os.getenv('HEALTH_ALERT_WINDOW_MINUTES', '15'))
    CATALOG_INSERT_ATTEMPTS = int(os.getenv('CATALOG_INSERT_ATTEMPTS', '3'))
    EXERCISE_SEARCH_DEFAULT_LIMIT = 10
    EXERCISE_SEARCH_MAX_LIMIT = 25
    DEFAULT_CLIENT_TRAINING_GOAL = 3


class DevelopmentConfig(Config):
    DEBUG = True
    JWT_COOKIE_SECURE = False


class ProductionConfig(Config):
    DEBUG = False
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')
    PREFERRED_URL_SCHEME = 'https'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET_KEY = 'testing-secret-key-with-enough-length'
    JWT_COOKIE_SECURE = False
    SCHEDULER_ENABLED = False
    LOG_FILE = None


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
