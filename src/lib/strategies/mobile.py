"""Mobile accordion menu"""

from typing import Any, Dict

from ...models.accordion import AccordionPolicy
from ...models.context import RenderContext
from ...models.node import MenuNode
from ..accordion import condition_make, localState_make, submenuId_make
from ..markup import classes_join, element_build, tagOpen_build
from .base import MenuStrategy


class AccordionStrategyMixin:
    """
    Policy plumbing shared by the accordion-style strategies.

    Expects ``self.options`` to define ``accordion_mode``,
    ``expand_active_trail`` and ``id_prefix``.
    """

    options: Any

    def policy_get(self) -> AccordionPolicy:
        return AccordionPolicy.policy_fromOptions(self.options)

    def submenuId_get(self, node: MenuNode) -> str:
        return submenuId_make(self.options.str_get("id_prefix"), node.id)

    def trail_expands(self, node: MenuNode) -> bool:
        """Parents on the current page's trail start open"""
        if not self.options.bool_get("expand_active_trail"):
            return False
        return node.is_current_ancestor or node.is_current_parent or node.is_current

    def trail_record(self, node: MenuNode, context: RenderContext) -> None:
        if self.trail_expands(node):
            context.submenu_open(node.depth, node.id)

    def containerState_get(self, node: MenuNode) -> Any:
        return localState_make(self.policy_get(), self.trail_expands(node))


class MobileAccordionStrategy(AccordionStrategyMixin, MenuStrategy):
    """
    Accordion of ``<div>`` items.

    A parent renders a toggle button whose ``aria-controls`` names the
    submenu container (``mobile-submenu-N``); both read the same accordion
    condition. Leaves render a plain link.
    """

    name = "mobile"
    DEFAULTS: Dict[str, Any] = {
        "max_depth": 5,
        "menu_item_class": "mobile-menu-item",
        "link_class": "mobile-menu-link",
        "submenu_class": "mobile-submenu",
        "toggle_class": "mobile-menu-toggle",
        "parent_link_class": "mobile-parent-link",
        "active_class": "is-active",
        "enable_icons": True,
        "fallback_icon": None,
        "accordion_mode": "classic",
        "show_indicators": True,
        "indicator_icon": "chevron-down",
        "show_parent_links": False,
        "expand_active_trail": True,
        "id_prefix": "mobile-submenu",
        "toggle_id_prefix": "mobile-toggle",
        "enable_caching": False,
        "cache_ttl": 1800,
    }

    def toggleId_get(self, node: MenuNode) -> str:
        return f"{self.options.str_get('toggle_id_prefix')}-{node.id}"

    def node_prepare(self, node: MenuNode, context: RenderContext) -> None:
        if self.childrenRenderable_are(node):
            self.trail_record(node, context)

    def itemOpen_render(self, node: MenuNode, context: RenderContext) -> str:
        item_class = self.options.cssClass_get("menu_item_class")

        if not self.childrenRenderable_are(node):
            classes = self.itemClasses_get(node, item_class, f"menu-item-{node.id}", f"depth-{node.depth}")
            link = self.link_render(node, self.options.cssClass_get("link_class"))
            return tagOpen_build("div", {"class": classes}) + link

        condition = condition_make(self.policy_get(), node)
        classes = self.itemClasses_get(
            node, item_class, f"menu-item-{node.id}", "has-children", "accordion-item", f"depth-{node.depth}"
        )
        container = tagOpen_build("div", {"class": classes, "x-data": self.containerState_get(node)})

        content = self.icon_get(node) + f'<span class="toggle-text">{node.title}</span>'
        if self.options.bool_get("show_indicators"):
            content += self.indicator_get(
                "toggle-indicator",
                {"x-bind:class": f"{{ 'rotate-180': {condition.expression_get()} }}"},
            )

        button = element_build("button", content, {
            "type": "button",
            "id": self.toggleId_get(node),
            "class": classes_join(self.options.cssClass_get("toggle_class"), f"toggle-depth-{node.depth}"),
            "aria-controls": self.submenuId_get(node),
            "x-bind:aria-expanded": condition.ariaExpanded_get(),
            "@click": condition.toggle_get(),
        })
        return container + button

    def itemClose_render(self, node: MenuNode, context: RenderContext) -> str:
        return "</div>"

    def levelOpen_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        condition = condition_make(self.policy_get(), parent)
        opening = tagOpen_build("div", {
            "id": self.submenuId_get(parent),
            "class": classes_join(self.options.cssClass_get("submenu_class"), f"submenu-depth-{depth + 1}"),
            "role": "region",
            "aria-labelledby": self.toggleId_get(parent),
            "x-show": condition.expression_get(),
            "x-cloak": True,
            "x-transition": True,
        })
        if self.options.bool_get("show_parent_links"):
            opening += self.link_render(parent, self.options.cssClass_get("parent_link_class"))
        return opening

    def levelClose_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        return "</div>"
