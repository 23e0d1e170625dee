"""
RenderContext and fragment cache tests
"""

from menuwalk.models.context import RenderContext, BufferedChild
from menuwalk.models.node import MenuNode
from menuwalk.lib.cache import MemoryFragmentCache, NullFragmentCache, cacheKey_make


def node(node_id, depth, has_children=False):
    return MenuNode.node_createForTesting(id=node_id, depth=depth, has_children=has_children)


class TestParentStack:
    """node_enter bookkeeping"""

    def test_parents_recorded_and_truncated(self):
        """Parents are recorded by depth and dropped on ascent"""
        context = RenderContext()
        assert context.node_enter(node(1, 0, has_children=True))
        assert context.node_enter(node(2, 1, has_children=True))
        assert context.parent_get(1).id == 2

        assert context.node_enter(node(3, 0))
        assert context.parent_stack == {}
        assert context.topLevel_is()

    def test_parent_get_default(self):
        """parent_get() defaults to the level above the current node"""
        context = RenderContext()
        context.node_enter(node(1, 0, has_children=True))
        context.node_enter(node(2, 1))
        assert context.parent_get().id == 1

    def test_skipped_depth_rejected(self):
        """A node two levels below its nearest parent is not recorded"""
        context = RenderContext()
        context.node_enter(node(1, 0, has_children=True))
        assert not context.node_enter(node(9, 2))
        assert context.items_rejected == 1
        assert context.node_lookup(9) is None
        assert context.current_node.id == 1

    def test_stack_holds_only_parents(self):
        """Only nodes with children enter the parent stack"""
        context = RenderContext()
        context.node_enter(node(1, 0, has_children=True))
        context.node_enter(node(2, 1))
        assert all(n.has_children and n.depth == d for d, n in context.parent_stack.items())


class TestScratchState:
    """Custom data, buffers, ids, open submenus"""

    def test_custom_data(self):
        """Scratch values can be set, read and removed"""
        context = RenderContext()
        context.data_set("k", 1)
        assert context.data_has("k")
        assert context.data_get("k") == 1
        context.data_remove("k")
        assert context.data_get("k", "gone") == "gone"

    def test_buffers(self):
        """Buffered children keep their order per parent until cleared"""
        context = RenderContext()
        first = BufferedChild(node(2, 1), "<a>2</a>")
        context.buffer_append(1, first)
        context.buffer_append(1, BufferedChild(node(3, 1), "<a>3</a>"))
        assert [r.node.id for r in context.buffer_get(1)] == [2, 3]
        assert context.buffer_last(1).node.id == 3
        context.buffer_clear(1)
        assert context.buffer_get(1) == []
        assert context.buffer_last(1) is None

    def test_ids(self):
        """Node ids give stable element ids, anonymous ids count up"""
        context = RenderContext()
        assert context.id_make("panel", 42) == "panel-42"
        assert context.id_make("anon") == "anon-1"
        assert context.id_make("anon") == "anon-2"

    def test_open_submenus(self):
        """Open submenus are tracked per depth"""
        context = RenderContext()
        context.submenu_open(0, 7)
        assert context.submenuOpen_is(0)
        assert context.submenuOpen_is(0, 7)
        assert not context.submenuOpen_is(0, 8)
        context.submenu_close(0)
        assert context.openSubmenus_get() == {}

    def test_stats_and_reset(self):
        """Counters and snapshot reflect the render; reset clears them but keeps the variant"""
        context = RenderContext(variant="mobile")
        context.node_enter(node(1, 0, has_children=True))
        context.node_enter(node(2, 1))
        context.cache_record(hit=True)
        context.cache_record(hit=False)

        stats = context.stats_get()
        assert stats["items_processed"] == 2
        assert stats["max_depth_reached"] == 1
        assert stats["cache_hit_ratio"] == 0.5

        snapshot = context.snapshot_create()
        assert snapshot["current_node"] == 2
        assert snapshot["parent_stack"] == {0: 1}

        context.reset()
        assert context.stats_get()["items_processed"] == 0
        assert context.nodes == {}
        assert context.variant == "mobile"


class TestFragmentCache:
    """In-memory cache and keys"""

    def test_ttl_expiry(self):
        """Entries expire after their TTL"""
        now = [100.0]
        cache = MemoryFragmentCache(clock=lambda: now[0])
        cache.set("k", "v", ttl=10)
        assert cache.get("k") == "v"
        now[0] = 111.0
        assert cache.get("k") is None

    def test_default_ttl(self):
        """ttl=0 falls back to the cache's default TTL"""
        now = [0.0]
        cache = MemoryFragmentCache(default_ttl=5, clock=lambda: now[0])
        cache.set("k", "v")
        now[0] = 6.0
        assert cache.get("k") is None

    def test_no_expiry(self):
        """A default TTL of 0 keeps entries indefinitely"""
        now = [0.0]
        cache = MemoryFragmentCache(default_ttl=0, clock=lambda: now[0])
        cache.set("k", "v")
        now[0] = 1e9
        assert cache.get("k") == "v"

    def test_purge(self):
        """purge() removes by prefix, purgeAll() removes everything"""
        cache = MemoryFragmentCache()
        cache.set("mobile:1", "a")
        cache.set("mobile:2", "b")
        cache.set("dropdown:1", "c")
        assert cache.purge("mobile:") == 2
        assert len(cache) == 1
        assert cache.purgeAll() == 1
        assert len(cache) == 0

    def test_expired_entries_evicted_when_full(self):
        """Filling the cache drops expired entries that were never read again"""
        now = [0.0]
        cache = MemoryFragmentCache(default_ttl=10, max_entries=3, clock=lambda: now[0])
        cache.set("old:1", "a")
        cache.set("old:2", "b")
        now[0] = 20.0
        cache.set("new:1", "c")
        cache.set("new:2", "d")
        assert sorted(cache.entries) == ["new:1", "new:2"]

    def test_oldest_evicted_at_capacity(self):
        """Without expired entries the oldest insertion makes room"""
        cache = MemoryFragmentCache(default_ttl=0, max_entries=2)
        cache.set("a", "1")
        cache.set("b", "2")
        cache.set("c", "3")
        assert len(cache) == 2
        assert cache.get("a") is None
        assert cache.get("c") == "3"

    def test_rewrite_does_not_evict(self):
        """Overwriting an existing key at capacity keeps the other entries"""
        cache = MemoryFragmentCache(default_ttl=0, max_entries=2)
        cache.set("a", "1")
        cache.set("b", "2")
        cache.set("b", "3")
        assert cache.get("a") == "1"
        assert cache.get("b") == "3"

    def test_expired_evict(self):
        """expired_evict() reports how many entries it removed"""
        now = [0.0]
        cache = MemoryFragmentCache(default_ttl=0, clock=lambda: now[0])
        cache.set("short", "a", ttl=5)
        cache.set("forever", "b")
        now[0] = 6.0
        assert cache.expired_evict() == 1
        assert list(cache.entries) == ["forever"]

    def test_null_cache(self):
        """The null cache never returns a stored value"""
        cache = NullFragmentCache()
        cache.set("k", "v")
        assert cache.get("k") is None

    def test_key_format(self):
        """Keys are variant:id:depth:digest"""
        key = cacheKey_make("dropdown", node(5, 1), "abc")
        variant, node_id, depth, digest = key.split(":")
        assert (variant, node_id, depth) == ("dropdown", "5", "1")
        assert len(digest) == 16

    def test_key_tracks_options_and_node(self):
        """Key changes with the options fingerprint or the node's fields"""
        base = cacheKey_make("dropdown", node(5, 1), "abc")
        assert cacheKey_make("dropdown", node(5, 1), "abc") == base
        assert cacheKey_make("dropdown", node(5, 1), "abd") != base
        changed = MenuNode.node_createForTesting(id=5, depth=1, title="Other")
        assert cacheKey_make("dropdown", changed, "abc") != base
