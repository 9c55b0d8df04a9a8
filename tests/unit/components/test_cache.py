"""
Unit tests for the render cache.
"""

from pageview.cache import RenderCache
from pageview.renderers import RenderMode


class TestLookup:
    def test_renders_on_miss(self, article):
        cache = RenderCache(article)
        assert 80 not in cache
        rendered = cache.get_or_render(80)
        assert rendered.width == 80
        assert 80 in cache
        assert len(cache) == 1

    def test_hit_returns_same_object(self, article):
        cache = RenderCache(article)
        assert cache.get_or_render(80) is cache.get_or_render(80)

    def test_get_does_not_render(self, article):
        cache = RenderCache(article)
        assert cache.get(40) is None
        assert len(cache) == 0

    def test_widths_kept_side_by_side(self, article):
        cache = RenderCache(article)
        wide = cache.get_or_render(80)
        cache.get_or_render(40)
        assert cache.get(80) is wide
        assert len(cache) == 2


class TestEviction:
    def test_unbounded_by_default(self, article):
        cache = RenderCache(article)
        for width in range(10, 30):
            cache.get_or_render(width)
        assert len(cache) == 20

    def test_least_recently_used_evicted(self, article):
        cache = RenderCache(article, max_entries=2)
        cache.get_or_render(80)
        cache.get_or_render(40)
        cache.get_or_render(80)
        cache.get_or_render(60)
        assert 80 in cache
        assert 60 in cache
        assert 40 not in cache


class TestInvalidation:
    def test_invalidate_all(self, article):
        cache = RenderCache(article)
        cache.get_or_render(80)
        cache.get_or_render(40)
        cache.invalidate_all()
        assert len(cache) == 0

    def test_listeners_notified(self, article):
        calls = []
        cache = RenderCache(article)
        cache.add_listener(lambda: calls.append("flushed"))
        cache.invalidate_all()
        assert calls == ["flushed"]

    def test_set_mode_invalidates(self, article):
        calls = []
        cache = RenderCache(article)
        cache.add_listener(lambda: calls.append("flushed"))
        before = cache.get_or_render(80)
        cache.set_mode(RenderMode.TREE_RAW)
        assert cache.mode is RenderMode.TREE_RAW
        assert calls == ["flushed"]
        assert cache.get_or_render(80) is not before
        assert cache.get_or_render(80).line_count == len(article)
