"""
Reference traversal driver

Hosts normally drive the strategies themselves. This module does the same
for standalone use: it takes the host's flat item list (every item names
its parent via ``menu_item_parent``), rebuilds the tree and issues the four
callbacks depth first:

    item_start -> [level_enter -> children -> level_exit] -> item_end

Items whose parent is missing from the list are treated as top-level
entries. Items that have children get the marker class the host would set.
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from ..config import appsettings
from ..models.context import RenderContext
from ..models.node import rawField_get
from .log import LOG
from .security import itemId_sanitize

RAW_FIELDS = (
    "ID",
    "title",
    "url",
    "classes",
    "target",
    "xfn",
    "attr_title",
    "description",
    "menu_item_parent",
    "current",
    "current_item_ancestor",
    "current_item_parent",
)


def rawItem_normalize(raw: Any) -> Dict[str, Any]:
    """Copy of a raw host item as a plain dict of the known fields"""
    item = {name: rawField_get(raw, name) for name in RAW_FIELDS}
    if item["ID"] is None:
        item["ID"] = rawField_get(raw, "id", 0)
    classes = item["classes"] or []
    if isinstance(classes, str):
        item["classes"] = classes.split()
    elif isinstance(classes, (list, tuple)):
        item["classes"] = [str(c) for c in classes if c]
    else:
        item["classes"] = []
    return item


def childMarker_add(item: Dict[str, Any]) -> Dict[str, Any]:
    marker = appsettings.has_children_class
    if marker not in item["classes"]:
        item = dict(item, classes=[*item["classes"], marker])
    return item


def items_group(items: Sequence[Dict[str, Any]]) -> Dict[int, List[Dict[str, Any]]]:
    """parent id -> children in original order; orphans go under the root"""
    root = appsettings.root_parent_id
    ids = {itemId_sanitize(item["ID"]) for item in items}
    children: Dict[int, List[Dict[str, Any]]] = defaultdict(list)
    for item in items:
        parent = itemId_sanitize(item["menu_item_parent"])
        if parent == itemId_sanitize(item["ID"]) or (parent != root and parent not in ids):
            parent = root
        children[parent].append(item)
    return children


def items_flatten(nested: Iterable[Any], parent_id: Optional[int] = None, start_id: int = 1) -> List[Dict[str, Any]]:
    """
    Convert a nested item list (``children:`` keys) into the host's flat form.

    Items without an ``ID`` are numbered from ``start_id`` upward, skipping
    ids already in use.
    """
    parent_id = appsettings.root_parent_id if parent_id is None else parent_id
    flat: List[Dict[str, Any]] = []
    used: Set[int] = set()

    def collect_ids(items: Iterable[Any]) -> None:
        for item in items:
            item_id = itemId_sanitize(rawField_get(item, "ID", rawField_get(item, "id", 0)))
            if item_id:
                used.add(item_id)
            collect_ids(rawField_get(item, "children", []) or [])

    collect_ids(nested)
    counter = [start_id]

    def next_id() -> int:
        while counter[0] in used:
            counter[0] += 1
        used.add(counter[0])
        return counter[0]

    def walk(items: Iterable[Any], parent: int, nested: bool) -> None:
        for raw in items:
            item = rawItem_normalize(raw)
            item_id = itemId_sanitize(item["ID"]) or next_id()
            item["ID"] = item_id
            if nested or not itemId_sanitize(item["menu_item_parent"]):
                item["menu_item_parent"] = parent
            flat.append(item)
            walk(rawField_get(raw, "children", []) or [], item_id, True)

    walk(nested, parent_id, False)
    return flat


def tree_walk(
    items: Iterable[Any],
    strategy: Any,
    output: List[str],
    context: RenderContext,
    max_depth: int = 0,
) -> List[str]:
    """
    Drive ``strategy`` over a flat item list.

    Args:
        items: Raw host items in menu order
        strategy: Object implementing the four traversal callbacks
        output: Buffer the strategy appends to
        context: Context for this render
        max_depth: Do not descend to this depth (0 = unlimited)

    Returns:
        ``output``
    """
    normalized = [rawItem_normalize(item) for item in items]
    children = items_group(normalized)
    visited: Set[int] = set()

    def element_walk(item: Dict[str, Any], depth: int) -> None:
        item_id = itemId_sanitize(item["ID"])
        if item_id and item_id in visited:
            LOG(f"Item {item_id} visited twice; skipped", level=2)
            return
        visited.add(item_id)

        kids = children.get(item_id, []) if item_id else []
        if kids:
            item = childMarker_add(item)

        strategy.item_start(output, item, depth, context)
        if kids and (max_depth == 0 or depth + 1 < max_depth):
            strategy.level_enter(output, depth, context)
            for kid in kids:
                element_walk(kid, depth + 1)
            strategy.level_exit(output, depth, context)
        strategy.item_end(output, item, depth, context)

    for item in children.get(appsettings.root_parent_id, []):
        element_walk(item, 0)

    LOG(f"Traversal visited {len(visited)} of {len(normalized)} items", level=2)
    return output
