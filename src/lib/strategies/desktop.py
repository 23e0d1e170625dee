"""Horizontal desktop menu bar with hover dropdowns"""

from typing import Any, Dict

from ...models.context import RenderContext
from ...models.node import MenuNode
from ..markup import classes_join, tagOpen_build
from .base import MenuStrategy


class DesktopStrategy(MenuStrategy):
    """
    Horizontal menubar.

    Top-level items with children open their dropdown on hover (with a close
    delay) or on click when hover is disabled. Each dropdown is labelled by
    its trigger link: ``desktop-link-N`` / ``desktop-submenu-N``.
    """

    name = "desktop"
    DEFAULTS: Dict[str, Any] = {
        "max_depth": 3,
        "top_level_class": "top-level-item",
        "menu_item_class": "menu-item",
        "link_class": "menu-link",
        "submenu_link_class": "submenu-link",
        "dropdown_class": "dropdown-menu",
        "mega_menu_class": "mega-menu",
        "active_class": "is-active",
        "has_children_class": "has-dropdown",
        "enable_icons": True,
        "fallback_icon": None,
        "enable_mega_menu": False,
        "mega_menu_columns": 3,
        "dropdown_indicator": True,
        "indicator_icon": "chevron-down",
        "enable_hover": True,
        "hover_delay": 200,
        "link_id_prefix": "desktop-link",
        "id_prefix": "desktop-submenu",
        "enable_caching": False,
        "cache_ttl": 3600,
    }

    def linkId_get(self, node: MenuNode) -> str:
        return f"{self.options.str_get('link_id_prefix')}-{node.id}"

    def submenuId_get(self, node: MenuNode) -> str:
        return f"{self.options.str_get('id_prefix')}-{node.id}"

    def itemOpen_render(self, node: MenuNode, context: RenderContext) -> str:
        expandable = self.childrenRenderable_are(node)
        hover = self.options.bool_get("enable_hover")

        classes = self.itemClasses_get(
            node,
            self.options.cssClass_get("menu_item_class"),
            self.options.cssClass_get("top_level_class") if node.topLevel_is() else "",
            self.options.cssClass_get("has_children_class") if expandable else "",
        )
        li_attributes: Dict[str, Any] = {"id": self.itemId_make(node), "class": classes, "role": "none"}

        link_extra: Dict[str, Any] = {"id": self.linkId_get(node), "role": "menuitem"}
        if expandable:
            li_attributes["x-data"] = "{ open: false, timer: null }"
            li_attributes["@keydown.escape"] = "open = false"
            if hover:
                delay = max(0, self.options.int_get("hover_delay", 0))
                li_attributes["@mouseenter"] = "clearTimeout(timer); open = true"
                li_attributes["@mouseleave"] = f"timer = setTimeout(() => open = false, {delay})"
            else:
                link_extra["@click.prevent"] = "open = !open"
            link_extra.update({
                "aria-haspopup": "true",
                "aria-controls": self.submenuId_get(node),
                "x-bind:aria-expanded": "open ? 'true' : 'false'",
            })

        content = self.label_get(node)
        if expandable and self.options.bool_get("dropdown_indicator"):
            content += self.indicator_get(
                "dropdown-indicator", {"x-bind:class": "{ 'rotate-180': open }"}
            )

        link_class = (
            self.options.cssClass_get("link_class")
            if node.topLevel_is()
            else self.options.cssClass_get("submenu_link_class")
        )
        return tagOpen_build("li", li_attributes) + self.link_render(node, link_class, content, link_extra)

    def itemClose_render(self, node: MenuNode, context: RenderContext) -> str:
        return "</li>"

    def levelOpen_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        classes = [self.options.cssClass_get("dropdown_class"), f"depth-{depth + 1}"]
        if depth == 0 and self.options.bool_get("enable_mega_menu"):
            columns = max(1, self.options.int_get("mega_menu_columns", 3))
            classes += [self.options.cssClass_get("mega_menu_class"), f"columns-{columns}"]

        return tagOpen_build("ul", {
            "id": self.submenuId_get(parent),
            "class": classes_join(*classes),
            "role": "menu",
            "aria-labelledby": self.linkId_get(parent),
            "x-show": "open",
            "x-cloak": True,
            "x-transition.opacity": True,
            "@click.outside": "open = false",
        })

    def levelClose_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        return "</ul>"
