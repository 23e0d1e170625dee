"""Vertical nested dropdown opened on hover"""

from typing import Any, Dict

from ...models.context import RenderContext
from ...models.node import MenuNode
from ..markup import classes_join, tagOpen_build
from .base import MenuStrategy


class DropdownStrategy(MenuStrategy):
    """
    Nested ``<ul>`` dropdown.

    Items with visible children own a local ``open`` flag toggled by
    mouseenter/mouseleave; their submenu is shown while ``open`` holds. Link
    classes depend on depth (root, child, deeper).
    """

    name = "dropdown"
    DEFAULTS: Dict[str, Any] = {
        "max_depth": 2,
        "menu_item_class": "dropdown-item",
        "submenu_class": "sub-menu",
        "root_link_class": "dropdown-link",
        "child_link_class": "dropdown-child-link",
        "subchild_link_class": "dropdown-subchild-link",
        "active_class": "is-active",
        "has_children_class": "has-children",
        "enable_icons": False,
        "fallback_icon": None,
        "show_indicators": True,
        "indicator_icon": "chevron-down",
        "enable_alpine": True,
        "enable_aria": True,
        "id_prefix": "dropdown-submenu",
        "enable_caching": False,
        "cache_ttl": 7200,
    }

    def linkClass_get(self, depth: int) -> str:
        if depth == 0:
            return self.options.cssClass_get("root_link_class")
        if depth == 1:
            return self.options.cssClass_get("child_link_class")
        return self.options.cssClass_get("subchild_link_class")

    def submenuId_get(self, node: MenuNode) -> str:
        return f"{self.options.str_get('id_prefix')}-{node.id}"

    def itemOpen_render(self, node: MenuNode, context: RenderContext) -> str:
        expandable = self.childrenRenderable_are(node)
        alpine = self.options.bool_get("enable_alpine")

        classes = self.itemClasses_get(
            node,
            self.options.cssClass_get("menu_item_class"),
            self.options.cssClass_get("has_children_class") if expandable else "",
            f"depth-{node.depth}",
        )
        li_attributes: Dict[str, Any] = {"id": self.itemId_make(node), "class": classes}
        if expandable and alpine:
            li_attributes.update({
                "x-data": "{ open: false }",
                "@mouseenter": "open = true",
                "@mouseleave": "open = false",
                "@keydown.escape": "open = false",
            })

        link_extra: Dict[str, Any] = {}
        if expandable and self.options.bool_get("enable_aria"):
            link_extra["aria-haspopup"] = "true"
            link_extra["aria-controls"] = self.submenuId_get(node)
            if alpine:
                link_extra["x-bind:aria-expanded"] = "open ? 'true' : 'false'"
            else:
                link_extra["aria-expanded"] = "false"

        content = self.label_get(node)
        if expandable and self.options.bool_get("show_indicators"):
            content += self.indicator_get("dropdown-indicator")

        link = self.link_render(node, self.linkClass_get(node.depth), content, link_extra)
        return tagOpen_build("li", li_attributes) + link

    def itemClose_render(self, node: MenuNode, context: RenderContext) -> str:
        return "</li>"

    def levelOpen_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        attributes: Dict[str, Any] = {
            "id": self.submenuId_get(parent),
            "class": classes_join(self.options.cssClass_get("submenu_class"), f"submenu-depth-{depth + 1}"),
            "role": "menu",
        }
        if self.options.bool_get("enable_alpine"):
            attributes.update({
                "x-show": "open",
                "x-cloak": True,
                "x-transition": True,
                "style": "display: none;",
            })
        return tagOpen_build("ul", attributes)

    def levelClose_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        return "</ul>"
