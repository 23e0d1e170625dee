"""Full-screen overlay menu with sliding accordion submenus"""

from typing import Any, Dict

from ...models.context import RenderContext
from ...models.node import MenuNode
from ..accordion import condition_make
from ..icons import svg_get
from ..markup import classes_join, element_build, tagOpen_build
from .base import MenuStrategy
from .mobile import AccordionStrategyMixin

_STYLE_OPEN = "max-height: 100vh; opacity: 1;"
_STYLE_CLOSED = "max-height: 0; opacity: 0;"


class OverlayStrategy(AccordionStrategyMixin, MenuStrategy):
    """
    Overlay panel content.

    Leaves are bare links; parents are a title button followed by a submenu
    ``<div id="submenu-N">`` whose inline style animates between open and
    closed according to the accordion condition.
    """

    name = "overlay"
    DEFAULTS: Dict[str, Any] = {
        "max_depth": 5,
        "item_class": "mobile-menu-item",
        "link_class": "mobile-menu-link",
        "title_class": "mobile-menu-title",
        "submenu_class": "mobile-submenu",
        "active_class": "is-active",
        "enable_icons": True,
        "fallback_icon": None,
        "caret_svg": True,
        "indicator_icon": "chevron-down",
        "accordion_mode": "classic",
        "expand_active_trail": True,
        "id_prefix": "submenu",
        "enable_caching": False,
        "cache_ttl": 1800,
    }

    def node_prepare(self, node: MenuNode, context: RenderContext) -> None:
        if self.childrenRenderable_are(node):
            self.trail_record(node, context)

    def itemOpen_render(self, node: MenuNode, context: RenderContext) -> str:
        label = self.icon_get(node) + f"<span>{node.title}</span>"

        if not self.childrenRenderable_are(node):
            active = self.options.cssClass_get("active_class") if node.active_is() else ""
            link_class = classes_join(self.options.cssClass_get("link_class"), f"level-{node.depth}", active)
            return self.link_render(node, link_class, label)

        condition = condition_make(self.policy_get(), node)
        container = tagOpen_build("div", {
            "class": classes_join(self.options.cssClass_get("item_class"), f"level-{node.depth}"),
            "x-data": self.containerState_get(node),
        })

        if self.options.bool_get("caret_svg"):
            label += svg_get(
                self.options.str_get("indicator_icon", "chevron-down"),
                "mobile-menu-caret",
                {"x-bind:class": f"{{ 'rotate-180': {condition.expression_get()} }}"},
            )

        button = element_build("button", label, {
            "type": "button",
            "class": classes_join(self.options.cssClass_get("title_class"), f"level-{node.depth}"),
            "@click": condition.toggle_get(),
            "x-bind:aria-expanded": condition.ariaExpanded_get(),
            "aria-controls": self.submenuId_get(node),
        })
        return container + button

    def itemClose_render(self, node: MenuNode, context: RenderContext) -> str:
        return "</div>" if self.childrenRenderable_are(node) else ""

    def levelOpen_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        condition = condition_make(self.policy_get(), parent)
        return tagOpen_build("div", {
            "id": self.submenuId_get(parent),
            "class": classes_join(self.options.cssClass_get("submenu_class"), f"level-{depth + 1}"),
            "x-bind:style": f"{condition.expression_get()} ? '{_STYLE_OPEN}' : '{_STYLE_CLOSED}'",
        })

    def levelClose_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        return "</div>"
