"""Multi-column mega-menu panels"""

from typing import Any, Dict, List

from ...models.context import BufferedChild, RenderContext
from ...models.node import MenuNode
from ..columns import columnCount_clamp, columns_balance
from ..log import LOG
from ..markup import classes_join, element_build, fragments_join, tagOpen_build
from ..security import htmlContent_sanitize
from .base import MenuStrategy

_MEGA_PARENT = "mega_parent"


class MultiColumnStrategy(MenuStrategy):
    """
    Top-level items with children open a panel of columns.

    Depth-1 children are not written as they arrive: each becomes a
    BufferedChild (a section) under its top-level parent, and depth-2
    children are attached to the most recent section. When the parent's
    level closes, the sections are distributed across columns by
    columns_balance() and the whole panel is emitted at once.

    Panel ids are ``mega-panel-N``; the trigger link carries the matching
    ``aria-controls``.
    """

    name = "multi-column"
    DEFAULTS: Dict[str, Any] = {
        "max_depth": 3,
        "menu_item_class": "menu-item",
        "top_level_class": "top-level-item",
        "has_dropdown_class": "has-dropdown",
        "trigger_class": "dropdown-trigger",
        "link_class": "menu-link",
        "arrow_class": "dropdown-arrow",
        "active_class": "is-active",
        "mega_panel_class": "mega-menu-panel",
        "container_class": "mega-menu-container",
        "columns_class": "mega-menu-columns",
        "column_class": "mega-menu-column",
        "column_content_class": "mega-menu-column-content",
        "section_class": "mega-menu-section",
        "column_header_class": "mega-menu-column-header",
        "column_link_class": "mega-menu-link",
        "section_items_class": "mega-menu-items",
        "section_item_class": "mega-menu-item",
        "description_class": "mega-menu-description",
        "featured_area_class": "mega-menu-featured",
        "columns": 3,
        "max_columns": 6,
        "min_items_per_column": 2,
        "balance_columns": True,
        "show_column_headers": True,
        "enable_descriptions": False,
        "enable_featured_content": False,
        "featured_content": "",
        "enable_icons": True,
        "fallback_icon": None,
        "enable_alpine": True,
        "id_prefix": "mega-panel",
        "link_id_prefix": "mega-trigger",
        "enable_caching": False,
        "cache_ttl": 3600,
    }

    def panelId_get(self, node: MenuNode) -> str:
        return f"{self.options.str_get('id_prefix')}-{node.id}"

    def linkId_get(self, node: MenuNode) -> str:
        return f"{self.options.str_get('link_id_prefix')}-{node.id}"

    def columnCount_get(self) -> int:
        return columnCount_clamp(self.options.int_get("columns", 3), self.options.int_get("max_columns", 6))

    # ------------------------------------------------------------------ #
    # Placement
    # ------------------------------------------------------------------ #

    def node_emit(self, output: List[str], node: MenuNode, context: RenderContext) -> None:
        if node.depth == 0:
            if self.childrenRenderable_are(node):
                context.data_set(_MEGA_PARENT, node.id)
            output.append(self.node_render(node, context))
            return

        root = context.parent_get(0)
        if root is None or context.data_get(_MEGA_PARENT) != root.id:
            LOG(f"[{self.name}] node {node.id} has no open panel; dropped", level=2)
            return

        if node.depth == 1:
            context.buffer_append(root.id, BufferedChild(node=node, fragment=self.node_render(node, context)))
            return

        section = context.buffer_last(root.id)
        owner = context.parent_get(1)
        if node.depth != 2 or section is None or owner is None or section.node.id != owner.id:
            LOG(f"[{self.name}] node {node.id} has no section to join; dropped", level=2)
            return
        section.children.append(self.node_render(node, context))

    # ------------------------------------------------------------------ #
    # Render hooks
    # ------------------------------------------------------------------ #

    def itemOpen_render(self, node: MenuNode, context: RenderContext) -> str:
        if node.depth == 0:
            return self.triggerItem_render(node)
        if node.depth == 1:
            return self.sectionHeader_render(node)
        link = self.link_render(node, self.options.cssClass_get("column_link_class"))
        return element_build("li", link, {"class": self.options.cssClass_get("section_item_class")})

    def triggerItem_render(self, node: MenuNode) -> str:
        expandable = self.childrenRenderable_are(node)
        classes = self.itemClasses_get(
            node,
            self.options.cssClass_get("menu_item_class"),
            self.options.cssClass_get("top_level_class"),
            self.options.cssClass_get("has_dropdown_class") if expandable else "",
        )
        li_attributes: Dict[str, Any] = {"id": self.itemId_make(node), "class": classes}
        link_class = self.options.cssClass_get("link_class")
        link_extra: Dict[str, Any] = {"id": self.linkId_get(node)}

        content = self.label_get(node)
        if expandable:
            link_class = classes_join(link_class, self.options.cssClass_get("trigger_class"))
            link_extra.update({"aria-haspopup": "true", "aria-controls": self.panelId_get(node)})
            if self.options.bool_get("enable_alpine"):
                li_attributes.update({
                    "x-data": "{ open: false }",
                    "@mouseenter": "open = true",
                    "@mouseleave": "open = false",
                    "@keydown.escape": "open = false",
                })
                link_extra["x-bind:aria-expanded"] = "open ? 'true' : 'false'"
            content += f'<i class="{self.options.cssClass_get("arrow_class")}" aria-hidden="true"></i>'

        return tagOpen_build("li", li_attributes) + self.link_render(node, link_class, content, link_extra)

    def sectionHeader_render(self, node: MenuNode) -> str:
        link = self.link_render(node, self.options.cssClass_get("column_link_class"))
        if self.options.bool_get("show_column_headers"):
            header = element_build("h3", link, {"class": self.options.cssClass_get("column_header_class")})
        else:
            header = link
        if self.options.bool_get("enable_descriptions") and node.description:
            header += element_build("p", node.description, {"class": self.options.cssClass_get("description_class")})
        return header

    def itemClose_render(self, node: MenuNode, context: RenderContext) -> str:
        return "</li>" if node.depth == 0 else ""

    def levelClose_render(self, parent: MenuNode, depth: int, context: RenderContext) -> str:
        if depth != 0:
            return ""
        records = context.buffer_get(parent.id)
        context.buffer_clear(parent.id)
        context.data_remove(_MEGA_PARENT)
        return self.panel_render(parent, records)

    # ------------------------------------------------------------------ #
    # Panel assembly
    # ------------------------------------------------------------------ #

    def section_render(self, record: BufferedChild) -> str:
        content = record.fragment
        if record.children:
            content += element_build(
                "ul", fragments_join(record.children), {"class": self.options.cssClass_get("section_items_class")}
            )
        return element_build("div", content, {
            "id": f"mega-section-{record.node.id}",
            "class": self.options.cssClass_get("section_class"),
        })

    def columns_render(self, records: List[BufferedChild]) -> str:
        columns = columns_balance(
            records,
            self.columnCount_get(),
            balance=self.options.bool_get("balance_columns"),
            min_items_per_column=self.options.int_get("min_items_per_column", 2),
            max_columns=self.options.int_get("max_columns", 6),
        )
        rendered = []
        for index, column in enumerate(columns):
            inner = element_build(
                "div",
                fragments_join(self.section_render(record) for record in column),
                {"class": self.options.cssClass_get("column_content_class")},
            )
            rendered.append(element_build("div", inner, {
                "class": classes_join(self.options.cssClass_get("column_class"), f"column-{index + 1}"),
            }))
        return "".join(rendered)

    def panel_render(self, parent: MenuNode, records: List[BufferedChild]) -> str:
        LOG(f"[{self.name}] flushing {len(records)} sections under {parent.id}", level=3)
        body = ""
        featured = self.options.str_get("featured_content")
        if self.options.bool_get("enable_featured_content") and featured:
            body += element_build(
                "div", htmlContent_sanitize(featured), {"class": self.options.cssClass_get("featured_area_class")}
            )
        body += element_build("div", self.columns_render(records), {
            "class": classes_join(self.options.cssClass_get("columns_class"), f"columns-{self.columnCount_get()}"),
        })
        container = element_build("div", body, {"class": self.options.cssClass_get("container_class")})

        attributes: Dict[str, Any] = {
            "id": self.panelId_get(parent),
            "class": self.options.cssClass_get("mega_panel_class"),
            "role": "region",
            "aria-labelledby": self.linkId_get(parent),
        }
        if self.options.bool_get("enable_alpine"):
            attributes.update({"x-show": "open", "x-cloak": True, "x-transition": True})
        return element_build("div", container, attributes)
