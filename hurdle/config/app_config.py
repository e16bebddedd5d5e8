"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


def _env_flag(name: str, default: str = 'False') -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration class with all settings."""
    
    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = _env_flag('DEBUG')
    
    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))
    
    # Statistics Storage Settings
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DATABASE = os.getenv('MONGO_DATABASE', 'hurdle')
    
    # Game Settings
    MAX_ATTEMPTS = int(os.getenv('MAX_ATTEMPTS', 4))
    HARD_MODE = _env_flag('HARD_MODE')
    DIFFICULTY = os.getenv('DIFFICULTY', 'medium')
    WORD_PROVIDER_RETRIES = int(os.getenv('WORD_PROVIDER_RETRIES', 3))
    SESSION_RETENTION_SECONDS = int(os.getenv('SESSION_RETENTION_SECONDS', 3600))
    
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
    MONGO_URI = None


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
