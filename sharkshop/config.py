"""
Configuration settings for the Shark Nutrition store backend
"""
import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw_value = os.getenv(name, "")
    try:
        return int(raw_value)
    except (TypeError, ValueError):
        return default


class ConfigurationError(RuntimeError):
    """Raised at startup when mandatory configuration is missing."""


class Config:
    """Flask application configuration"""

    APP_ENV = (os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development").strip().lower()

    # Token signing secret. Mandatory: there is no fallback value.
    JWT_SECRET_KEY = (os.getenv("JWT_SECRET_KEY") or os.getenv("JWT_SECRET") or "").strip()
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)
    # Cookie first, then the Authorization header; the first token found is used.
    JWT_TOKEN_LOCATION = ["cookies", "headers"]
    JWT_ACCESS_COOKIE_NAME = os.getenv("ADMIN_COOKIE_NAME") or "adminToken"
    JWT_ACCESS_COOKIE_PATH = "/"
    JWT_SESSION_COOKIE = False
    JWT_COOKIE_CSRF_PROTECT = False

    BCRYPT_ROUNDS = _int_env("BCRYPT_ROUNDS", 12)

    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/sharknutrition")

    CORS_DEFAULT_ORIGINS = [
        "http://localhost:5173",
        "https://gift-shop-backend-nine.vercel.app",
    ]
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "")
    TRUSTED_PROXY_HOPS = _int_env("TRUSTED_PROXY_HOPS", 1)

    MAX_CONTENT_LENGTH = _int_env("MAX_UPLOAD_SIZE_MB", 5) * 1024 * 1024
    PRODUCT_UPLOAD_FOLDER = os.getenv("PRODUCT_UPLOAD_FOLDER") or None
    PRODUCT_ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "webp"}

    LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").upper()


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    APP_ENV = "testing"
    JWT_SECRET_KEY = "test-signing-secret-not-for-production"
    MONGO_URI = "mongodb://localhost:27017/sharknutrition_test"
    TRUSTED_PROXY_HOPS = 0
    BCRYPT_ROUNDS = 4
    LOG_LEVEL = "WARNING"


def is_production(config) -> bool:
    return str(config.get("APP_ENV", "")).strip().lower() == "production"


def require_signing_secret(config) -> None:
    secret = str(config.get("JWT_SECRET_KEY") or "").strip()
    if not secret:
        raise ConfigurationError(
            "JWT_SECRET_KEY is not set. Refusing to start without a token signing secret."
        )
