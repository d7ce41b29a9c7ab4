import json

import redis
from flask import current_app

from .. import extensions

# Invalidation leaves an empty marker instead of deleting the key. A resolve
# that read the row before the invalidation only writes with NX, so it cannot
# bring a deleted or changed link back into the cache while the marker lives.
TOMBSTONE = ""
TOMBSTONE_TTL = 60


def _key(short_code: str) -> str:
    return f"short:{short_code}"


def get_cached_link(short_code: str) -> dict | None:
    client = extensions.redis_client
    if not client:
        return None
    try:
        cached = client.get(_key(short_code))
    except redis.RedisError as exc:
        current_app.logger.warning(f"Redis GET failed for {short_code}: {exc}")
        return None
    if not cached:
        return None
    try:
        payload = json.loads(cached)
    except ValueError:
        current_app.logger.warning(f"Dropping malformed cache entry for {short_code}")
        invalidate_link(short_code)
        return None
    if not isinstance(payload, dict) or not payload.get("url"):
        return None
    return payload


def cache_link(short_code: str, original_url: str, link_id: int, only_if_absent: bool = False) -> None:
    """Store short_code -> url.

    ``only_if_absent`` is for read-through fills: the write is skipped when
    the key exists, including when it holds an invalidation marker.
    """
    client = extensions.redis_client
    if not client:
        return
    ttl = int(current_app.config.get("REDIS_TTL", 3600))
    payload = json.dumps({"url": original_url, "id": link_id})
    try:
        client.set(_key(short_code), payload, ex=ttl, nx=only_if_absent)
    except redis.RedisError as exc:
        current_app.logger.warning(f"Redis SET failed for {short_code}: {exc}")


def invalidate_link(*short_codes: str) -> None:
    client = extensions.redis_client
    if not client or not short_codes:
        return
    try:
        pipe = client.pipeline()
        for code in short_codes:
            pipe.set(_key(code), TOMBSTONE, ex=TOMBSTONE_TTL)
        pipe.execute()
    except redis.RedisError as exc:
        current_app.logger.warning(f"Redis invalidation failed for {short_codes}: {exc}")
