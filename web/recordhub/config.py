"""
Configuration management for the record API.
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class ConfigurationError(Exception):
    """Raised when required configuration is missing."""
    pass


def _get_int(name: str, default: int):
    value = os.getenv(name)
    if value is None or value == '':
        return default
    try:
        return int(value)
    except ValueError:
        return None


class Config:
    """Configuration class for application settings."""

    # MongoDB Configuration
    MONGODB_URI = os.getenv('MONGODB_URI', 'mongodb://localhost:27017/')
    DATABASE_NAME = os.getenv('DATABASE_NAME', 'recordhub')
    MONGODB_TIMEOUT_MS = _get_int('MONGODB_TIMEOUT_MS', 5000)

    # API Server Configuration
    API_HOST = os.getenv('API_HOST', '0.0.0.0')
    API_PORT = _get_int('API_PORT', 5000)
    API_DEBUG = os.getenv('API_DEBUG', 'False').lower() == 'true'

    # Logging Configuration
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    LOG_FILE = os.getenv('LOG_FILE') or None

    @classmethod
    def validate(cls):
        """
        Validate that all required configuration values are set.

        Raises:
            ConfigurationError: If required configuration is missing
        """
        required_vars = {
            'MONGODB_URI': cls.MONGODB_URI,
            'DATABASE_NAME': cls.DATABASE_NAME,
            'MONGODB_TIMEOUT_MS': cls.MONGODB_TIMEOUT_MS,
            'API_PORT': cls.API_PORT,
        }

        missing = [var for var, value in required_vars.items() if value in (None, '')]

        if missing:
            raise ConfigurationError(
                f"Missing or invalid environment variables: {', '.join(missing)}. "
                f"Please check your .env file."
            )

        if cls.LOG_LEVEL not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ConfigurationError(f"Unknown LOG_LEVEL: {cls.LOG_LEVEL}")

    @classmethod
    def as_flask_config(cls) -> dict:
        """
        Settings consumed by the Flask application factory.

        Returns:
            Dictionary suitable for app.config.update()
        """
        return {
            'JSON_SORT_KEYS': False,
            'MONGODB_URI': cls.MONGODB_URI,
            'DATABASE_NAME': cls.DATABASE_NAME,
            'MONGODB_TIMEOUT_MS': cls.MONGODB_TIMEOUT_MS,
        }
