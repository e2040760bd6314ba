import os
from datetime import timedelta
import logging
from logging.handlers import RotatingFileHandler
import sys

from google.cloud import secretmanager


def setup_logging(app_env):
    """Configure logging based on environment"""
    log_level = logging.DEBUG if app_env == "development" else logging.INFO
    log_dir = os.getenv("LOG_DIR", "logs")

    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    # Stamp every record with the laboratory it concerns
    class LaboratoryFormatter(logging.Formatter):
        def format(self, record):
            if not hasattr(record, "laboratory_id"):
                record.laboratory_id = "NO_LAB"
            return super().format(record)

    log_format = LaboratoryFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(laboratory_id)s] - %(message)s"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_format)

    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "solhub-admin.log"), maxBytes=10 * 1024 * 1024, backupCount=5
    )
    file_handler.setFormatter(log_format)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to prevent duplicates
    root_logger.handlers = []

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    return root_logger


logger = setup_logging(os.getenv("FLASK_ENV", "development"))


def get_secret(secret_id, default_value):
    """Get secret from Secret Manager or return default value"""
    project = os.getenv("GCP_PROJECT")
    if not project:
        return default_value
    try:
        client = secretmanager.SecretManagerServiceClient()
        name = f"projects/{project}/secrets/{secret_id}/versions/latest"
        response = client.access_secret_version(request={"name": name})
        return response.payload.data.decode("UTF-8")
    except Exception as e:
        logger.warning(f"Could not load secret {secret_id}: {e}")
        return default_value


def get_db_url(db_name):
    """Get database URL for the privileged service role"""
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    user = os.getenv("DB_USER", "postgres")
    password = os.getenv("DB_PASSWORD", "postgres")
    host = os.getenv("DB_HOST", "localhost")
    port = os.getenv("DB_PORT", "5432")

    ssl_mode = "?sslmode=require" if os.getenv("FLASK_ENV") == "production" else ""

    return f"postgresql://{user}:{password}@{host}:{port}/{db_name}{ssl_mode}"


class BaseConfig:
    """Base configuration with shared settings"""

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = True

    # CORS settings
    CORS_SUPPORTS_CREDENTIALS = True
    CORS_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")

    # JWT settings
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=30)

    # Rate limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_STRATEGY = "fixed-window"
    RATELIMIT_STORAGE_URI = "memory://"
    LOGIN_RATE_LIMIT = "10 per minute"

    # Uploads are not accepted; keep request bodies small
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024

    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_size": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "max_overflow": 20,
        "pool_pre_ping": True,
    }

    # Caching
    CACHE_TYPE = "SimpleCache"
    CACHE_DEFAULT_TIMEOUT = 300
    STATS_CACHE_TIMEOUT = 60

    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379")

    # Realtime stream
    STREAM_HEARTBEAT_SECONDS = 15

    # Secrets
    SECRET_KEY = get_secret("solhub-admin-secret-key", os.getenv("SECRET_KEY", "dev-secret-key"))
    JWT_SECRET_KEY = get_secret(
        "solhub-admin-jwt-secret-key", os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-key")
    )
    ADMIN_ACCESS_CODE = get_secret("solhub-admin-access-code", os.getenv("ADMIN_ACCESS_CODE"))
    SENTRY_DSN = None


class DevelopmentConfig(BaseConfig):
    """Development configuration"""

    DEBUG = True
    DEVELOPMENT = True

    SQLALCHEMY_DATABASE_URI = get_db_url("solhub_dev")
    SQLALCHEMY_ECHO = False

    CORS_ORIGINS = ["http://localhost:3000"]

    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


class ProductionConfig(BaseConfig):
    """Production configuration"""

    DEBUG = False
    TESTING = False

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    SQLALCHEMY_ECHO = False

    RATELIMIT_STORAGE_URI = os.getenv("REDIS_URL", "memory://")
    RATELIMIT_HEADERS_ENABLED = True

    CORS_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",")

    CACHE_TYPE = "RedisCache"
    CACHE_REDIS_URL = os.getenv("REDIS_URL")

    SENTRY_DSN = get_secret("sentry-dsn", os.getenv("SENTRY_DSN"))

    BEHIND_PROXY = bool(os.getenv("BEHIND_PROXY", False))

    PREFERRED_URL_SCHEME = "https"


class TestingConfig(BaseConfig):
    """Testing configuration"""

    TESTING = True
    DEBUG = False

    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite://")
    SQLALCHEMY_ECHO = False
    SQLALCHEMY_ENGINE_OPTIONS = {}

    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    ADMIN_ACCESS_CODE = "SOLHUB-TEST"

    RATELIMIT_ENABLED = False

    CACHE_TYPE = "NullCache"

    STREAM_HEARTBEAT_SECONDS = 1


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config():
    """Get configuration based on environment"""
    env = os.getenv("FLASK_ENV", "development")
    return config_by_name[env]
