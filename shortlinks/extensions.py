# shortlinks/extensions.py

from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
import redis

db = SQLAlchemy()
cors = CORS()
redis_client = None


def init_redis(app):
    """Initialize Redis using REDIS_URL from config.

    Caching is optional: without REDIS_URL, or when the server does not answer
    a ping, ``redis_client`` stays ``None`` and every lookup goes to the database.
    """
    global redis_client

    url = app.config.get("REDIS_URL")
    if not url:
        app.logger.info("REDIS_URL not set, short code cache disabled.")
        redis_client = None
        return

    try:
        client = redis.Redis.from_url(url, decode_responses=True)
        client.ping()
        redis_client = client
        app.logger.info("Redis initialized successfully.")
    except redis.RedisError as exc:
        redis_client = None
        app.logger.warning(f"Redis initialization failed: {exc}")
