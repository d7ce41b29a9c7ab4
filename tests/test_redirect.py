import json
from types import SimpleNamespace

import pytest
import redis

from shortlinks import extensions
from shortlinks.errors import LinkNotFound
from shortlinks.repositories import link_repository
from shortlinks.services import cache, link_service


def test_redirect_to_original_url(client, app):
    link_service.create_link("user_a", "https://example.com/landing", short_code="go1")

    resp = client.get("/go1")

    assert resp.status_code == 302
    assert resp.headers["Location"] == "https://example.com/landing"


def test_redirect_does_not_require_auth_and_unknown_is_404(client):
    resp = client.get("/missing")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_core_routes_take_precedence(client):
    assert client.get("/").status_code == 200
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "ok"


def test_redirect_populates_cache_on_miss(client, app, fake_redis):
    link = link_service.create_link("user_a", "https://example.com", short_code="warm")
    fake_redis.reset_mock()
    fake_redis.get.return_value = None

    resp = client.get("/warm")

    assert resp.status_code == 302
    fake_redis.get.assert_called_once_with("short:warm")
    (key, payload), kwargs = fake_redis.set.call_args
    assert key == "short:warm"
    assert kwargs == {"ex": app.config["REDIS_TTL"], "nx": True}
    assert json.loads(payload) == {"url": "https://example.com", "id": link.id}


def test_redirect_served_from_cache(client, fake_redis):
    fake_redis.get.return_value = json.dumps({"url": "https://cached.example", "id": 99})

    resp = client.get("/cachedonly")

    assert resp.status_code == 302
    assert resp.headers["Location"] == "https://cached.example"
    fake_redis.set.assert_not_called()


def test_redirect_falls_back_to_database_when_redis_fails(client, fake_redis):
    link_service.create_link("user_a", "https://example.com/db", short_code="fallback")
    fake_redis.get.side_effect = redis.ConnectionError("down")
    fake_redis.set.side_effect = redis.ConnectionError("down")

    resp = client.get("/fallback")

    assert resp.status_code == 302
    assert resp.headers["Location"] == "https://example.com/db"


def test_update_and_delete_invalidate_cache(client, alice, fake_redis):
    client.post("/links", json={"original_url": "https://a.example", "short_code": "old"}, headers=alice)
    pipe = fake_redis.pipeline.return_value

    client.put("/links/old", json={"short_code": "new"}, headers=alice)
    assert [c.args[0] for c in pipe.set.call_args_list] == ["short:old", "short:new"]
    # the new code is re-cached after the markers are written
    assert fake_redis.set.call_args.args[0] == "short:new"
    assert fake_redis.set.call_args.kwargs["nx"] is False

    pipe.reset_mock()
    client.delete("/links/new", headers=alice)
    pipe.set.assert_called_once_with("short:new", cache.TOMBSTONE, ex=cache.TOMBSTONE_TTL)
    pipe.execute.assert_called_once()


class _MemoryRedis:
    """Just enough of redis.Redis for the short code cache."""

    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, ex=None, nx=False):
        if nx and key in self.data:
            return None
        self.data[key] = value
        return True

    def pipeline(self):
        return self

    def execute(self):
        return []


def test_resolve_racing_a_delete_does_not_recache(app, monkeypatch):
    store = _MemoryRedis()
    monkeypatch.setattr(extensions, "redis_client", store)
    link_service.create_link("user_a", "https://example.com/race", short_code="racy")
    store.data.clear()

    original_lookup = link_repository.get_link_by_code

    def lookup_then_delete(short_code):
        # Row is read, then the owner deletes it before the resolve caches it
        link = original_lookup(short_code)
        snapshot = SimpleNamespace(short_code=link.short_code, original_url=link.original_url, id=link.id)
        link_service.delete_link("user_a", short_code)
        return snapshot

    monkeypatch.setattr(link_repository, "get_link_by_code", lookup_then_delete)
    assert link_service.resolve_link("racy") == "https://example.com/race"
    monkeypatch.setattr(link_repository, "get_link_by_code", original_lookup)

    assert store.get("short:racy") == cache.TOMBSTONE
    with pytest.raises(LinkNotFound):
        link_service.resolve_link("racy")


def test_recreated_code_replaces_invalidation_marker(app, monkeypatch):
    store = _MemoryRedis()
    monkeypatch.setattr(extensions, "redis_client", store)
    link_service.create_link("user_a", "https://first.example", short_code="again")
    link_service.delete_link("user_a", "again")

    link_service.create_link("user_b", "https://second.example", short_code="again")

    assert json.loads(store.get("short:again"))["url"] == "https://second.example"
    assert link_service.resolve_link("again") == "https://second.example"
