"""
Menu node value object

MenuNode is the immutable, sanitized form of one navigation entry. It is
built once per entry, at the moment the traversal driver surfaces it, and
never changes afterwards.
"""

from dataclasses import dataclass, field, asdict, replace
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

# Marker classes the host sets on menu entries
CURRENT_CLASS = "current-menu-item"
CURRENT_ANCESTOR_CLASS = "current-menu-ancestor"
CURRENT_PARENT_CLASS = "current-menu-parent"

TextFilter = Callable[[str, int], str]


def rawField_get(raw: Any, name: str, default: Any = None) -> Any:
    """
    Read a field from a raw host node.

    Raw nodes may be mappings (decoded YAML/JSON, dicts built by the host)
    or objects exposing the fields as attributes (pydantic models).
    """
    if raw is None:
        return default
    if isinstance(raw, Mapping):
        value = raw.get(name, default)
    else:
        value = getattr(raw, name, default)
    return default if value is None else value


def flag_parse(value: Any) -> bool:
    """Interpret host booleans, which arrive as bools, ints or strings"""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _text_keep(text: str, node_id: int) -> str:
    return text


@dataclass(frozen=True)
class MenuNode:
    """
    Immutable, sanitized representation of one navigation entry.

    Attributes:
        id: Host-assigned id, unique within one tree
        title: Plain-text title, already escaped for HTML
        url: Sanitized link target (placeholder URL when absent or rejected)
        depth: Nesting level, 0 for top-level entries
        parent_id: Id of the parent entry (root sentinel for depth 0)
        classes: Sanitized, deduplicated CSS classes from the host
        target: Link target (e.g. '_blank')
        relationship: Link relationship (rel)
        tooltip: Plain-text tooltip (title attribute)
        description: Sanitized inline HTML description
        has_children: Entry owns a submenu
        is_current: Entry is the current page
        is_current_ancestor: Entry is an ancestor of the current page
        is_current_parent: Entry is the direct parent of the current page
        icon: Validated icon class token (e.g. 'fa fa-home'), or None

    Example:
        >>> node = MenuNode.node_createFromRaw(
        ...     {'ID': 7, 'title': 'Home', 'url': '/', 'attr_title': 'fa-home'}, depth=0
        ... )
        >>> node.icon
        'fa fa-home'
    """

    id: int
    title: str
    url: str
    depth: int = 0
    parent_id: int = 0
    classes: Tuple[str, ...] = field(default_factory=tuple)
    target: str = ""
    relationship: str = ""
    tooltip: str = ""
    description: str = ""
    has_children: bool = False
    is_current: bool = False
    is_current_ancestor: bool = False
    is_current_parent: bool = False
    icon: Optional[str] = None

    @classmethod
    def node_createFromRaw(
        cls, raw: Any, depth: int = 0, text_filter: Optional[TextFilter] = None
    ) -> "MenuNode":
        """
        Build a MenuNode from raw host data.

        Title and tooltip pass through ``text_filter`` (the host's content
        filter, called as ``text_filter(text, node_id)``), then lose their
        markup. The title is escaped, the URL sanitized, classes deduplicated
        and sanitized. Active-state flags are true when either the host
        boolean or the matching marker class says so. Malformed input never
        raises: it degrades to placeholder URL, no classes and no icon.

        Args:
            raw: Host node (mapping or attribute object)
            depth: Depth reported by the traversal driver
            text_filter: Optional host content filter

        Returns:
            MenuNode instance
        """
        from ..config import appsettings
        from ..lib.security import (
            classList_sanitize,
            html_escape,
            htmlContent_sanitize,
            itemId_sanitize,
            text_strip,
            url_sanitize,
        )
        from ..lib.icons import iconToken_extract

        text_filter = text_filter or _text_keep

        node_id = itemId_sanitize(rawField_get(raw, "ID", rawField_get(raw, "id", 0)))
        depth = max(0, itemId_sanitize(depth))

        title = text_filter(str(rawField_get(raw, "title", "")), node_id)
        tooltip = text_strip(text_filter(str(rawField_get(raw, "attr_title", "")), node_id))
        classes = tuple(classList_sanitize(rawField_get(raw, "classes", [])))

        if depth == 0:
            parent_id = appsettings.root_parent_id
        else:
            parent_id = itemId_sanitize(rawField_get(raw, "menu_item_parent", 0))

        return cls(
            id=node_id,
            title=html_escape(text_strip(title)),
            url=url_sanitize(rawField_get(raw, "url", "")),
            depth=depth,
            parent_id=parent_id,
            classes=classes,
            target=text_strip(rawField_get(raw, "target", "")),
            relationship=text_strip(rawField_get(raw, "xfn", "")),
            tooltip=tooltip,
            description=htmlContent_sanitize(rawField_get(raw, "description", ""), allow_links=False),
            has_children=appsettings.has_children_class in classes,
            is_current=flag_parse(rawField_get(raw, "current", False)) or CURRENT_CLASS in classes,
            is_current_ancestor=flag_parse(rawField_get(raw, "current_item_ancestor", False))
            or CURRENT_ANCESTOR_CLASS in classes,
            is_current_parent=flag_parse(rawField_get(raw, "current_item_parent", False))
            or CURRENT_PARENT_CLASS in classes,
            icon=iconToken_extract(tooltip, classes),
        )

    @classmethod
    def node_createForTesting(cls, **overrides: Any) -> "MenuNode":
        """Build a node directly from field values (no sanitization)"""
        values: Dict[str, Any] = {"id": 1, "title": "Test Item", "url": "#"}
        values.update(overrides)
        if "classes" in values:
            values["classes"] = tuple(values["classes"])
        return cls(**values)

    def active_is(self) -> bool:
        """True when the node is current, a current ancestor or a current parent"""
        return self.is_current or self.is_current_ancestor or self.is_current_parent

    def topLevel_is(self) -> bool:
        return self.depth == 0

    def newWindow_opens(self) -> bool:
        return self.target == "_blank"

    def icon_has(self) -> bool:
        return self.icon is not None

    def class_has(self, name: str) -> bool:
        return name in self.classes

    def classString_get(self, *extra: str) -> str:
        """Node classes plus ``extra``, deduplicated, space-joined"""
        result = []
        for name in (*self.classes, *extra):
            if name and name not in result:
                result.append(name)
        return " ".join(result)

    def linkTitle_get(self) -> str:
        """Tooltip to emit as title attribute; empty when it was consumed as the icon"""
        from ..config import appsettings

        if self.icon_has() and appsettings.icon_marker in self.tooltip:
            return ""
        return self.tooltip

    def linkAttributes_get(self) -> Dict[str, str]:
        """
        Attributes for the node's anchor element.

        ``href`` is always present; ``target``, ``rel`` and ``title`` only
        when non-empty. New-window links get ``noopener noreferrer``; the
        current page gets ``aria-current="page"``. Values are unescaped;
        markup.attributes_build() escapes them on output.
        """
        attributes: Dict[str, str] = {"href": self.url}
        if self.target:
            attributes["target"] = self.target

        rel = self.relationship.split()
        if self.newWindow_opens():
            rel += [r for r in ("noopener", "noreferrer") if r not in rel]
        if rel:
            attributes["rel"] = " ".join(rel)

        title = self.linkTitle_get()
        if title:
            attributes["title"] = title
        if self.is_current:
            attributes["aria-current"] = "page"
        return attributes

    def node_with(self, **changes: Any) -> "MenuNode":
        """Copy of this node with ``changes`` applied"""
        return replace(self, **changes)

    def asdict(self) -> Dict[str, Any]:
        return asdict(self)
