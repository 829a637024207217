"""
Application configuration read from the environment.

The .env file is loaded by the app module before this one is imported.
Malformed values fail fast at import time instead of silently falling back.
"""
import os


class EnvironmentConfigError(Exception):
    """Raised when an environment variable holds an unusable value."""
    pass


def _env_bool(name, default):
    return os.getenv(name, default).lower() in ('true', '1', 't')


def _env_int(name, default):
    raw_value = os.getenv(name, str(default))
    try:
        return int(raw_value)
    except ValueError:
        raise EnvironmentConfigError(f"{name} must be an integer, got '{raw_value}'")


def _env_list(name):
    return [item.strip() for item in os.getenv(name, '').split(',') if item.strip()]


class Config:
    # Flask Debug Mode
    DEBUG = _env_bool('FLASK_DEBUG', 'False')
    TESTING = False

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # CORS Configuration - origins of the authoring UI / game directory
    CORS_ORIGINS_LIST = _env_list('CORS_ORIGINS')

    # Upper sanity bound on any bet sent over HTTP
    MAX_REQUEST_BET = _env_int('MAX_REQUEST_BET', 2**31 - 1)



class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    LOG_LEVEL = 'DEBUG'
