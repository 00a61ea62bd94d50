"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 3000))
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Admin Settings
    ADMIN_NAME = os.getenv('ADMIN_NAME', 'yiuyiu')

    # Game Settings (applied at the start of each round)
    DEFAULT_ROWS = int(os.getenv('DEFAULT_ROWS', 10))
    DEFAULT_COLS = int(os.getenv('DEFAULT_COLS', 20))
    DEFAULT_DURATION = int(os.getenv('DEFAULT_DURATION', 120))
    COUNTDOWN_SECONDS = int(os.getenv('COUNTDOWN_SECONDS', 3))
    TICK_SECONDS = float(os.getenv('TICK_SECONDS', 1.0))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
