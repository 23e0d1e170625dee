"""
Per-render state

RenderContext holds everything that changes while one traversal is being
rendered. Strategies are stateless apart from their options, so one
strategy may serve many renders as long as each render gets its own
context.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .node import MenuNode
from .options import RenderOptions


@dataclass
class BufferedChild:
    """
    A child whose markup is held back until its parent's level closes.

    Attributes:
        node: The buffered node
        fragment: Its pre-rendered markup
        children: Pre-rendered fragments of its own children, when the
            strategy nests one more level inside the buffered record
    """
    node: MenuNode
    fragment: str
    children: List[str] = field(default_factory=list)


@dataclass
class RenderContext:
    """
    Mutable state scoped to one render call.

    Attributes:
        variant: Registry key of the variant being rendered
        options: Strategy options (shared, read-only)
        verbosity: LOG verbosity while this context is connected to the logger
        cache: Optional fragment cache owned by the caller
        text_filter: Optional host content filter for titles and tooltips
        current_node: Node most recently accepted
        current_depth: Depth of current_node
        parent_stack: depth -> nearest ancestor at that depth that has children
        open_submenus: depth -> node id of submenus open on first paint
        nodes: Accepted nodes by id
        buffers: parent id -> buffered children
        custom_data: Strategy scratch values
        items_processed: Nodes accepted
        items_rejected: Nodes dropped for lack of a parent
        max_depth_reached: Deepest accepted depth
        cache_hits / cache_misses: Fragment cache counters

    Invariant: ``parent_stack[d]``, when present, is a node with
    ``has_children`` set and ``depth == d``.
    """

    variant: str = ""
    options: Optional[RenderOptions] = None
    verbosity: int = 0
    cache: Optional[Any] = None
    text_filter: Optional[Callable[[str, int], str]] = None

    current_node: Optional[MenuNode] = None
    current_depth: int = 0
    parent_stack: Dict[int, MenuNode] = field(default_factory=dict)
    open_submenus: Dict[int, int] = field(default_factory=dict)
    nodes: Dict[int, MenuNode] = field(default_factory=dict)
    buffers: Dict[int, List[BufferedChild]] = field(default_factory=dict)
    custom_data: Dict[str, Any] = field(default_factory=dict)

    items_processed: int = 0
    items_rejected: int = 0
    max_depth_reached: int = 0
    cache_hits: int = 0
    cache_misses: int = 0

    _id_counter: int = 0
    _started: float = field(default_factory=time.perf_counter)

    def node_enter(self, node: MenuNode) -> bool:
        """
        Record a visit to ``node``.

        The parent stack is truncated to ``node.depth`` entries first. A node
        below the top level whose depth has no parent entry at ``depth - 1``
        (a skipped level, or a parent that was itself dropped) is rejected:
        the method returns False and the node is not recorded.
        """
        depth = node.depth
        self.parent_stack = {d: n for d, n in self.parent_stack.items() if d < depth}

        if depth > 0 and (depth - 1) not in self.parent_stack:
            self.items_rejected += 1
            return False

        self.current_node = node
        self.current_depth = depth
        self.items_processed += 1
        self.max_depth_reached = max(self.max_depth_reached, depth)
        self.nodes[node.id] = node
        if node.has_children:
            self.parent_stack[depth] = node
        return True

    def parent_get(self, depth: Optional[int] = None) -> Optional[MenuNode]:
        """Ancestor with children at ``depth`` (default: one above the current node)"""
        if depth is None:
            depth = self.current_depth - 1
        return self.parent_stack.get(depth)

    def topLevel_is(self) -> bool:
        return self.current_depth == 0

    def node_lookup(self, node_id: int) -> Optional[MenuNode]:
        return self.nodes.get(node_id)

    # Custom data
    def data_set(self, key: str, value: Any) -> None:
        self.custom_data[key] = value

    def data_get(self, key: str, default: Any = None) -> Any:
        return self.custom_data.get(key, default)

    def data_has(self, key: str) -> bool:
        return key in self.custom_data

    def data_remove(self, key: str) -> None:
        self.custom_data.pop(key, None)

    # Open submenus (client state on first paint)
    def submenu_open(self, depth: int, node_id: int) -> None:
        self.open_submenus[depth] = node_id

    def submenu_close(self, depth: int) -> None:
        self.open_submenus.pop(depth, None)

    def submenuOpen_is(self, depth: int, node_id: Optional[int] = None) -> bool:
        if depth not in self.open_submenus:
            return False
        return node_id is None or self.open_submenus[depth] == node_id

    def openSubmenus_get(self) -> Dict[int, int]:
        return dict(self.open_submenus)

    # Child buffers
    def buffer_append(self, parent_id: int, record: BufferedChild) -> None:
        self.buffers.setdefault(parent_id, []).append(record)

    def buffer_get(self, parent_id: int) -> List[BufferedChild]:
        return list(self.buffers.get(parent_id, []))

    def buffer_last(self, parent_id: int) -> Optional[BufferedChild]:
        records = self.buffers.get(parent_id)
        return records[-1] if records else None

    def buffer_clear(self, parent_id: int) -> None:
        self.buffers.pop(parent_id, None)

    def id_make(self, prefix: str, node_id: Optional[int] = None) -> str:
        """
        Element id. Node-derived ids are deterministic (``prefix-42``);
        without a node id a per-render counter is used.
        """
        if node_id is not None:
            return f"{prefix}-{node_id}"
        self._id_counter += 1
        return f"{prefix}-{self._id_counter}"

    def cache_record(self, hit: bool) -> None:
        if hit:
            self.cache_hits += 1
        else:
            self.cache_misses += 1

    def stats_get(self) -> Dict[str, Any]:
        """Diagnostic counters for this render"""
        lookups = self.cache_hits + self.cache_misses
        return {
            "variant": self.variant,
            "items_processed": self.items_processed,
            "items_rejected": self.items_rejected,
            "max_depth_reached": self.max_depth_reached,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "cache_hit_ratio": round(self.cache_hits / lookups, 3) if lookups else 0.0,
            "elapsed_ms": round((time.perf_counter() - self._started) * 1000, 3),
        }

    def snapshot_create(self) -> Dict[str, Any]:
        """Copy of the traversal state, for debugging"""
        return {
            "current_node": self.current_node.id if self.current_node else None,
            "current_depth": self.current_depth,
            "parent_stack": {d: n.id for d, n in self.parent_stack.items()},
            "open_submenus": self.openSubmenus_get(),
            "buffers": {pid: [r.node.id for r in records] for pid, records in self.buffers.items()},
            "custom_data": dict(self.custom_data),
            "stats": self.stats_get(),
        }

    def reset(self) -> None:
        """Clear traversal state so the context can serve another render"""
        self.current_node = None
        self.current_depth = 0
        self.parent_stack = {}
        self.open_submenus = {}
        self.nodes = {}
        self.buffers = {}
        self.custom_data = {}
        self.items_processed = 0
        self.items_rejected = 0
        self.max_depth_reached = 0
        self.cache_hits = 0
        self.cache_misses = 0
        self._id_counter = 0
        self._started = time.perf_counter()
