from unittest.mock import patch

import redis

from app.config import settings
from app.services.redis_client import RedisRateLimiter


class FakePipeline:
    def __init__(self, client):
        self.client = client
        self.commands = []

    def set(self, *args, **kwargs):
        self.commands.append(("set", args, kwargs))

    def decr(self, *args):
        self.commands.append(("decr", args, {}))

    def ttl(self, *args):
        self.commands.append(("ttl", args, {}))

    def execute(self):
        return [getattr(self.client, name)(*args, **kwargs) for name, args, kwargs in self.commands]


class FakeRedis:
    def __init__(self):
        self.store = {}
        self.expiry = {}

    def pipeline(self, transaction=True):
        return FakePipeline(self)

    def set(self, key, value, ex=None, nx=False):
        if nx and key in self.store:
            return None
        self.store[key] = int(value)
        self.expiry[key] = ex
        return True

    def decr(self, key):
        if key not in self.store:
            self.expiry[key] = None
        self.store[key] = self.store.get(key, 0) - 1
        return self.store[key]

    def ttl(self, key):
        if key not in self.store:
            return -2
        return -1 if self.expiry.get(key) is None else self.expiry[key]


class ExpiresBeforeDecr(FakeRedis):
    """Window runs out between SET NX and DECR on the first request."""

    def __init__(self):
        super().__init__()
        self.expire_next_decr = True

    def decr(self, key):
        if self.expire_next_decr:
            self.expire_next_decr = False
            self.store.pop(key, None)
            self.expiry.pop(key, None)
        return super().decr(key)


class BrokenRedis:
    def pipeline(self, transaction=True):
        return FakePipeline(self)

    def set(self, *args, **kwargs):
        raise redis.ConnectionError("connection refused")

    def decr(self, key):
        raise redis.ConnectionError("connection refused")

    def ttl(self, key):
        raise redis.ConnectionError("connection refused")


def test_allows_exactly_the_budget_then_denies():
    limiter = RedisRateLimiter(client=FakeRedis(), limit=3, window_seconds=60)

    results = [limiter.allow("client-a") for _ in range(5)]

    assert results == [True, True, True, False, False]


def test_budgets_are_per_client():
    limiter = RedisRateLimiter(client=FakeRedis(), limit=1, window_seconds=60)

    assert limiter.allow("client-a")
    assert not limiter.allow("client-a")
    assert limiter.allow("client-b")


def test_window_is_set_on_first_request():
    fake = FakeRedis()
    limiter = RedisRateLimiter(client=fake, limit=5, window_seconds=30)

    limiter.allow("client-a")

    assert fake.expiry["ratelimit:client-a"] == 30
    assert fake.store["ratelimit:client-a"] == 4


def test_window_rollover_between_set_and_decr_keeps_an_expiry():
    fake = ExpiresBeforeDecr()
    limiter = RedisRateLimiter(client=fake, limit=3, window_seconds=60)

    assert limiter.allow("client-a")

    key = "ratelimit:client-a"
    assert fake.expiry[key] == 60
    assert fake.store[key] == 2
    assert [limiter.allow("client-a") for _ in range(3)] == [True, True, False]


def test_defaults_are_read_from_settings_at_construction():
    with patch.object(settings, "rate_limit_requests", 7), \
            patch.object(settings, "rate_limit_window_seconds", 15):
        limiter = RedisRateLimiter(client=FakeRedis())

    assert limiter.limit == 7
    assert limiter.window_seconds == 15


def test_redis_outage_fails_open():
    limiter = RedisRateLimiter(client=BrokenRedis(), limit=1, window_seconds=60)

    assert limiter.allow("client-a")
    assert limiter.allow("client-a")
