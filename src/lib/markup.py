"""
HTML element builders shared by the strategies

Attribute values are escaped here, so callers pass plain (unescaped) values.
Element content is passed through untouched: it is either markup produced by
other builders or text already escaped at MenuNode construction.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from .security import attribute_escape

# Attributes emitted even when their value is the empty string
_EMPTY_ALLOWED = {"alt"}


def classes_join(*classes: Any) -> str:
    """Join class fragments, skipping empties and duplicates"""
    result = []
    for value in classes:
        if not value:
            continue
        if isinstance(value, (list, tuple)):
            tokens = [str(v) for v in value if v]
        else:
            tokens = str(value).split()
        for token in tokens:
            if token not in result:
                result.append(token)
    return " ".join(result)


def attributes_build(attributes: Optional[Mapping[str, Any]]) -> str:
    """
    Render an attribute mapping as `` name="value"`` pairs.

    None, False and empty values are skipped; True renders a bare boolean
    attribute (``x-cloak``); lists are space-joined.

    Example:
        >>> attributes_build({'id': 'a', 'x-cloak': True, 'title': ''})
        ' id="a" x-cloak'
    """
    if not attributes:
        return ""

    parts = []
    for name, value in attributes.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(name)
            continue
        if isinstance(value, (list, tuple)):
            value = classes_join(value)
        value = str(value)
        if value == "" and name not in _EMPTY_ALLOWED:
            continue
        parts.append(f'{name}="{attribute_escape(value)}"')

    return (" " + " ".join(parts)) if parts else ""


def tagOpen_build(tag: str, attributes: Optional[Mapping[str, Any]] = None) -> str:
    return f"<{tag}{attributes_build(attributes)}>"


def element_build(tag: str, content: str = "", attributes: Optional[Mapping[str, Any]] = None) -> str:
    """Complete element: opening tag, content, closing tag"""
    return f"{tagOpen_build(tag, attributes)}{content}</{tag}>"


def fragments_join(fragments: Iterable[str]) -> str:
    return "".join(fragment for fragment in fragments if fragment)


def attributes_merge(base: Dict[str, Any], extra: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge ``extra`` into ``base``; ``class`` values are combined, others replaced"""
    merged = dict(base)
    for name, value in (extra or {}).items():
        if name == "class" and merged.get("class"):
            merged["class"] = classes_join(merged["class"], value)
        else:
            merged[name] = value
    return merged
