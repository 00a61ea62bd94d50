"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules and constants (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    TARGET_SUM, MAX_NAME_LENGTH, SETTINGS_BOUNDS, COUNTDOWN_BOUNDS,
    parse_settings_update, validate_game_settings, validate_countdown_seconds
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'TARGET_SUM', 'MAX_NAME_LENGTH', 'SETTINGS_BOUNDS', 'COUNTDOWN_BOUNDS',
    'parse_settings_update', 'validate_game_settings', 'validate_countdown_seconds'
]
