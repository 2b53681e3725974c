"""Unit tests for round-robin proxy selection."""

from relay.proxy.health import HealthTracker
from relay.proxy.selector import ProxySelector

POOL = ["https://p1.test/", "https://p2.test/", "https://p3.test/"]


class TestPickNext:
    def test_round_robin_order(self, health):
        selector = ProxySelector(POOL, health)
        picks = [selector.pick_next() for _ in range(6)]
        assert picks == POOL + POOL

    def test_starts_at_first_entry(self, health):
        assert ProxySelector(POOL, health).pick_next() == "https://p1.test/"

    def test_skips_marked_down(self, health):
        selector = ProxySelector(POOL, health)
        health.mark_down("https://p1.test/")
        picks = [selector.pick_next() for _ in range(4)]
        assert "https://p1.test/" not in picks
        assert picks == ["https://p2.test/", "https://p3.test/"] * 2

    def test_continues_from_previous_position(self, health):
        selector = ProxySelector(POOL, health)
        assert selector.pick_next() == "https://p1.test/"
        health.mark_down("https://p2.test/")
        assert selector.pick_next() == "https://p3.test/"
        assert selector.pick_next() == "https://p1.test/"

    def test_returns_none_when_all_down(self, health):
        selector = ProxySelector(POOL, health)
        for proxy in POOL:
            health.mark_down(proxy)
        assert selector.pick_next() is None

    def test_cursor_keeps_advancing_when_all_down(self, health, clock):
        selector = ProxySelector(POOL, health)
        selector.pick_next()  # p1
        for proxy in POOL:
            health.mark_down(proxy)
        assert selector.pick_next() is None
        clock.advance(45)
        # A full cycle returns the cursor to p1, so the rotation continues at p2
        assert selector.pick_next() == "https://p2.test/"

    def test_recovered_proxy_selectable_again(self, health, clock):
        selector = ProxySelector(["https://p1.test/"], health)
        health.mark_down("https://p1.test/")
        assert selector.pick_next() is None
        clock.advance(45)
        assert selector.pick_next() == "https://p1.test/"

    def test_single_proxy_repeats(self, health):
        selector = ProxySelector(["https://only.test/"], health)
        assert [selector.pick_next() for _ in range(3)] == ["https://only.test/"] * 3

    def test_empty_pool_returns_none(self):
        assert ProxySelector([], HealthTracker()).pick_next() is None

    def test_pool_is_immutable_copy(self, health):
        source = list(POOL)
        selector = ProxySelector(source, health)
        source.append("https://p4.test/")
        picks = [selector.pick_next() for _ in range(4)]
        assert picks == POOL + POOL[:1]
