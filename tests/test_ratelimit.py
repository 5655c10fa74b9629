"""Tests for the in-process sliding window rate limiter."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.ratelimit import RateLimitMiddleware, SlidingWindowLimiter


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestSlidingWindowLimiter:
    def test_rejects_over_limit_until_window_passes(self):
        clock = FakeClock()
        limiter = SlidingWindowLimiter(limit=2, window_seconds=60, clock=clock)

        assert limiter.hit("1.2.3.4")
        clock.now = 10
        assert limiter.hit("1.2.3.4")
        clock.now = 20
        assert not limiter.hit("1.2.3.4")

        clock.now = 200
        assert limiter.hit("1.2.3.4")

    def test_keys_are_counted_separately(self):
        limiter = SlidingWindowLimiter(limit=1, window_seconds=60, clock=FakeClock())

        assert limiter.hit("a")
        assert not limiter.hit("a")
        assert limiter.hit("b")

    def test_steady_overload_still_lets_limit_through_each_window(self):
        clock = FakeClock()
        limiter = SlidingWindowLimiter(limit=50, window_seconds=60, clock=clock)

        allowed = 0
        for second in range(300):
            clock.now = second
            allowed += limiter.hit("1.2.3.4")

        assert allowed == 50 * 5

    def test_rejected_hits_do_not_extend_the_window(self):
        clock = FakeClock()
        limiter = SlidingWindowLimiter(limit=1, window_seconds=60, clock=clock)

        assert limiter.hit("a")
        clock.now = 59
        assert not limiter.hit("a")
        clock.now = 60
        assert limiter.hit("a")

    def test_idle_clients_are_forgotten(self):
        clock = FakeClock()
        limiter = SlidingWindowLimiter(limit=5, window_seconds=60, clock=clock)
        for n in range(1000):
            limiter.hit(f"10.0.{n // 256}.{n % 256}")
        assert limiter.tracked_keys == 1000

        clock.now = 61
        limiter.hit("10.9.9.9")

        assert limiter.tracked_keys == 1

    def test_active_clients_survive_a_sweep(self):
        clock = FakeClock()
        limiter = SlidingWindowLimiter(limit=1, window_seconds=60, clock=clock)
        limiter.hit("old")
        clock.now = 30
        limiter.hit("recent")

        clock.now = 61
        limiter.hit("new")

        assert limiter.tracked_keys == 2
        assert not limiter.hit("recent")

    def test_reset(self):
        limiter = SlidingWindowLimiter(limit=1, window_seconds=60, clock=FakeClock())
        limiter.hit("a")

        limiter.reset()

        assert limiter.hit("a")


def build_app(limit):
    app = FastAPI()
    app.add_middleware(
        RateLimitMiddleware,
        limiter=SlidingWindowLimiter(limit=limit, window_seconds=60),
        prefixes=["/api/orders"],
    )

    @app.get("/api/orders/ping")
    def ping():
        return {"ok": True}

    @app.get("/api/products")
    def products():
        return []

    return app


class TestRateLimitMiddleware:
    def test_limited_prefix(self):
        client = TestClient(build_app(limit=2))

        assert client.get("/api/orders/ping").status_code == 200
        assert client.get("/api/orders/ping").status_code == 200
        response = client.get("/api/orders/ping")

        assert response.status_code == 429
        assert response.json() == {"error": "Too many requests. Please try again later."}

    def test_other_paths_are_not_limited(self):
        client = TestClient(build_app(limit=1))

        for _ in range(5):
            assert client.get("/api/products").status_code == 200
