"""
Shared strategy base

A strategy consumes the four traversal callbacks and appends markup to the
output buffer it is handed. All per-render state lives in the RenderContext
passed into every callback; the strategy itself only holds its options.

Callback order, as issued by the traversal driver:

    item_start(node)
        level_enter(depth)        only when the node has visible children
            item_start(child) ... item_end(child)
        level_exit(depth)
    item_end(node)

Depth limits: with ``max_depth`` = N, nodes at depth >= N and levels whose
children would sit at depth >= N are ignored without error.

A node marked as having children may still get no level callbacks (the
driver found no children, or stopped descending). item_end then emits the
empty level itself, so every ``aria-controls`` has a target.
"""

from typing import Any, Dict, List, Optional

from ...models.context import RenderContext
from ...models.node import MenuNode, rawField_get
from ...models.options import RenderOptions
from ..cache import cacheKey_make
from ..icons import icon_render, svg_get
from ..log import LOG
from ..markup import attributes_merge, classes_join, element_build
from ..security import itemId_sanitize

_LEVELS_OPENED = "levels_opened"


class MenuStrategy:
    """
    Base for all layout strategies.

    Subclasses set ``name`` and ``DEFAULTS`` and override the render hooks
    (itemOpen_render, itemClose_render, levelOpen_render, levelClose_render);
    the callbacks themselves handle depth limits, node construction, parent
    validation and fragment caching.
    """

    name: str = "base"
    DEFAULTS: Dict[str, Any] = {
        "max_depth": 0,
        "enable_icons": True,
        "enable_caching": False,
        "cache_ttl": 3600,
    }

    def __init__(self, options: Optional[RenderOptions] = None) -> None:
        self.options = options if options is not None else self.options_make()

    @classmethod
    def options_make(cls, overrides: Optional[Dict[str, Any]] = None) -> RenderOptions:
        """Resolve ``overrides`` against this strategy's defaults"""
        return RenderOptions(cls.DEFAULTS, overrides, name=f"'{cls.name}' strategy option")

    @property
    def max_depth(self) -> int:
        return max(0, self.options.int_get("max_depth", 0))

    def depth_ignores(self, depth: int) -> bool:
        return self.max_depth > 0 and depth >= self.max_depth

    def childrenRenderable_are(self, node: MenuNode) -> bool:
        """True when ``node`` has children and their depth is within the limit"""
        return node.has_children and not self.depth_ignores(node.depth + 1)

    # ------------------------------------------------------------------ #
    # Traversal callbacks
    # ------------------------------------------------------------------ #

    def level_enter(self, output: List[str], depth: int, context: RenderContext) -> None:
        if self.depth_ignores(depth + 1):
            return
        parent = context.parent_get(depth)
        if parent is None:
            LOG(f"level_enter({depth}) without a parent; ignored", level=3)
            return
        self.levelOpened_mark(parent, context)
        output.append(self.levelOpen_render(parent, depth, context))

    def level_exit(self, output: List[str], depth: int, context: RenderContext) -> None:
        if self.depth_ignores(depth + 1):
            return
        parent = context.parent_get(depth)
        if parent is None:
            return
        output.append(self.levelClose_render(parent, depth, context))

    def item_start(self, output: List[str], raw: Any, depth: int, context: RenderContext) -> None:
        if self.depth_ignores(depth):
            LOG(f"[{self.name}] depth {depth} beyond max_depth {self.max_depth}; ignored", level=3)
            return

        node = MenuNode.node_createFromRaw(raw, depth, context.text_filter)
        if not context.node_enter(node):
            LOG(f"[{self.name}] node {node.id} dropped: no parent with children at depth {depth - 1}", level=1)
            return

        LOG(f"[{self.name}] item_start id={node.id} depth={depth}", level=3)
        self.node_emit(output, node, context)

    def item_end(self, output: List[str], raw: Any, depth: int, context: RenderContext) -> None:
        if self.depth_ignores(depth):
            return
        node_id = itemId_sanitize(rawField_get(raw, "ID", rawField_get(raw, "id", 0)))
        node = context.node_lookup(node_id)
        if node is None or node.depth != depth:
            return
        if self.childrenRenderable_are(node) and not self.levelOpened_was(node, context):
            LOG(f"[{self.name}] node {node.id} had no level callbacks; emitting an empty level", level=3)
            output.append(self.levelOpen_render(node, depth, context))
            output.append(self.levelClose_render(node, depth, context))
        output.append(self.itemClose_render(node, context))

    def levelOpened_mark(self, parent: MenuNode, context: RenderContext) -> None:
        opened = context.data_get(_LEVELS_OPENED)
        if opened is None:
            opened = set()
            context.data_set(_LEVELS_OPENED, opened)
        opened.add(parent.id)

    def levelOpened_was(self, node: MenuNode, context: RenderContext) -> bool:
        return node.id in context.data_get(_LEVELS_OPENED, ())

    # ------------------------------------------------------------------ #
    # Node rendering
    # ------------------------------------------------------------------ #

    def node_emit(self, output: List[str], node: MenuNode, context: RenderContext) -> None:
        """Place an accepted node's markup; buffering strategies override this"""
        self.node_prepare(node, context)
        output.append(self.node_render(node, context))

    def node_prepare(self, node: MenuNode, context: RenderContext) -> None:
        """Context side effects for ``node`` that must happen even on a cache hit"""
        return None

    def node_render(self, node: MenuNode, context: RenderContext) -> str:
        """
        Opening markup for ``node``, served from the fragment cache when enabled.

        Cache failures are treated as misses.
        """
        cache = context.cache
        if cache is None or not self.options.bool_get("enable_caching"):
            return self.itemOpen_render(node, context)

        key = cacheKey_make(context.variant or self.name, node, self.options.fingerprint_get())
        try:
            cached = cache.get(key)
        except Exception as e:
            LOG(f"Fragment cache read failed for {key}: {e}", level=1)
            cached = None

        if cached is not None:
            context.cache_record(hit=True)
            return cached

        context.cache_record(hit=False)
        fragment = self.itemOpen_render(node, context)
        try:
            cache.set(key, fragment, self.options.int_get("cache_ttl", 0))
        except Exception as e:
            LOG(f"Fragment cache write failed for {key}: {e}", level=1)
        return fragment

    # Render hooks
    def itemOpen_render(self, node: MenuNode, context: RenderContext) -> str:
        raise NotImplementedError(f"{type(self).__name__} must implement itemOpen_render()")

    def itemClose_render(self, node: MenuNode, context: RenderContext) -> str:
        return ""

    def levelOpen_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        return ""

    def levelClose_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        return ""

    # ------------------------------------------------------------------ #
    # Shared helpers
    # ------------------------------------------------------------------ #

    def icon_get(self, node: MenuNode, css_class: str = "menu-icon") -> str:
        if not self.options.bool_get("enable_icons"):
            return ""
        return icon_render(node.icon, css_class, fallback=self.options.get("fallback_icon"))

    def indicator_get(self, css_class: str = "menu-indicator", extra: Optional[Dict[str, Any]] = None) -> str:
        name = self.options.str_get("indicator_icon", "chevron-down")
        return svg_get(name, css_class, extra)

    def label_get(self, node: MenuNode, css_class: str = "menu-text") -> str:
        """Icon followed by the (already escaped) title"""
        return f'{self.icon_get(node)}<span class="{css_class}">{node.title}</span>'

    def link_render(
        self,
        node: MenuNode,
        css_class: str,
        content: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> str:
        attributes = attributes_merge(node.linkAttributes_get(), {"class": css_class})
        attributes = attributes_merge(attributes, extra)
        return element_build("a", self.label_get(node) if content is None else content, attributes)

    def itemClasses_get(self, node: MenuNode, *extra: str) -> str:
        """Host classes for the node plus configured ``extra`` classes and the active class"""
        active = self.options.cssClass_get("active_class") if node.active_is() else ""
        return classes_join(node.classString_get(), *extra, active)

    def itemId_make(self, node: MenuNode) -> str:
        return f"menu-item-{node.id}"
