"""Configuration module for Flask application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '1') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')
    TESTING = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Database (backs the 'sql' storage backend)
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///salon.db')
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'false').lower() == 'true'

    # Key-value storage: 'sql', 'redis' or 'memory'
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'sql')
    REDIS_URL = os.getenv('REDIS_URL', 'redis://redis:6379/0')

    # Key namespacing
    # Global keys:  <STORAGE_KEY_PREFIX>_admin, _salons_accounts, _session
    # Tenant keys:  <TENANT_KEY_PREFIX>_<tenant_id>_<resource>
    STORAGE_KEY_PREFIX = os.getenv('STORAGE_KEY_PREFIX', 'beautyflow')
    TENANT_KEY_PREFIX = os.getenv('TENANT_KEY_PREFIX', 'bf')

    # Backoffice admin, seeded on first use
    DEFAULT_ADMIN_EMAIL = os.getenv('DEFAULT_ADMIN_EMAIL', 'admin@leaderbright.com')
    DEFAULT_ADMIN_PASSWORD = os.getenv('DEFAULT_ADMIN_PASSWORD', 'admin2025')

    # Subscriptions (amount in FCFA, period in days)
    SUBSCRIPTION_AMOUNT = int(os.getenv('SUBSCRIPTION_AMOUNT', '25000'))
    SUBSCRIPTION_DAYS = int(os.getenv('SUBSCRIPTION_DAYS', '30'))

    # 'legacy' keeps the stored h_xxx format, 'scrypt' uses werkzeug
    PASSWORD_HASH_SCHEME = os.getenv('PASSWORD_HASH_SCHEME', 'legacy')

    # Run pending account migrations when the store is initialised
    AUTO_MIGRATE = os.getenv('AUTO_MIGRATE', 'true').lower() == 'true'


class TestConfig(Config):
    """Configuration used by the test suite."""

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ECHO = False
    STORAGE_BACKEND = 'memory'
    STORAGE_KEY_PREFIX = 'beautyflow'
    TENANT_KEY_PREFIX = 'bf'
    PASSWORD_HASH_SCHEME = 'legacy'
    AUTO_MIGRATE = True
