import os
from dotenv import load_dotenv

load_dotenv()


def _require_env(key: str) -> str:
    value = os.getenv(key)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {key}")
    return value


def _split_env(key: str, default: str = "") -> list[str]:
    raw = os.getenv(key, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _bool_env(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = _require_env("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = _require_env("DATABASE_URL")
    BASE_URL = _require_env("BASE_URL").rstrip("/")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Identity provider: shared secret (HS256) or JWKS endpoint (RS256)
    AUTH_JWT_SECRET = os.getenv("AUTH_JWT_SECRET")
    AUTH_JWKS_URL = os.getenv("AUTH_JWKS_URL")
    AUTH_ALGORITHMS = _split_env("AUTH_ALGORITHMS")
    AUTH_ISSUER = os.getenv("AUTH_ISSUER")
    AUTH_AUDIENCE = os.getenv("AUTH_AUDIENCE")

    REDIS_URL = os.getenv("REDIS_URL")
    REDIS_TTL = int(os.getenv("REDIS_TTL", 3600))

    SHORT_CODE_LENGTH = int(os.getenv("SHORT_CODE_LENGTH", 7))
    SHORT_CODE_MAX_ATTEMPTS = int(os.getenv("SHORT_CODE_MAX_ATTEMPTS", 5))

    CORS_ORIGINS = _split_env("CORS_ORIGINS", "*")
    BLOCKED_DOMAINS = _split_env("BLOCKED_DOMAINS")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    AUTO_CREATE_TABLES = _bool_env("AUTO_CREATE_TABLES", True)
