"""Flat list of links: top level only unless max_depth is raised"""

from typing import Any, Dict

from ...models.context import RenderContext
from ...models.node import MenuNode
from ..markup import tagOpen_build
from .base import MenuStrategy


class SimpleStrategy(MenuStrategy):
    """
    Plain ``<li><a></a></li>`` items.

    With the default ``max_depth`` of 1 children are never rendered; a
    larger limit nests them in plain ``<ul>`` sublists.
    """

    name = "simple"
    DEFAULTS: Dict[str, Any] = {
        "max_depth": 1,
        "item_class": "menu-item",
        "link_class": "menu-link",
        "submenu_class": "sub-menu",
        "active_class": "is-active",
        "enable_icons": False,
        "fallback_icon": None,
        "enable_caching": False,
        "cache_ttl": 3600,
    }

    def itemOpen_render(self, node: MenuNode, context: RenderContext) -> str:
        classes = self.itemClasses_get(node, self.options.cssClass_get("item_class"))
        opening = tagOpen_build("li", {"id": self.itemId_make(node), "class": classes})
        return opening + self.link_render(node, self.options.cssClass_get("link_class"))

    def itemClose_render(self, node: MenuNode, context: RenderContext) -> str:
        return "</li>"

    def levelOpen_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        submenu_class = self.options.cssClass_get("submenu_class")
        return tagOpen_build("ul", {"class": f"{submenu_class} depth-{depth + 1}"})

    def levelClose_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        return "</ul>"
