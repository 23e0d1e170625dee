"""
Icon resolution and markup

Icon tokens come from a node's tooltip or classes (``fa-home`` style). Other
icon references (inline SVG names, image paths, unicode entities) appear in
strategy options such as fallback or caret icons.
"""

import re
from typing import Iterable, Optional

from ..config import appsettings
from .markup import attributes_build
from .security import attribute_escape, html_escape, url_sanitize

_TOKEN_ALLOWED = re.compile(r"^[A-Za-z0-9\- ]+$")
_FONTAWESOME = re.compile(r"^(fa[srlbdt]?\s+)?fa-[\w-]+")
_IMAGE = re.compile(r"\.(png|jpe?g|gif|webp|avif)$", re.IGNORECASE)
_UNICODE_ENTITY = re.compile(r"^&#(x[0-9a-fA-F]+|[0-9]+);$")

ICON_FONTAWESOME = "fontawesome"
ICON_SVG = "svg"
ICON_IMAGE = "image"
ICON_UNICODE = "unicode"
ICON_CUSTOM = "custom"

_SVG_PATHS = {
    "chevron-down": "M19 9l-7 7-7-7",
    "chevron-up": "M5 15l7-7 7 7",
    "chevron-right": "M9 5l7 7-7 7",
    "chevron-left": "M15 19l-7-7 7-7",
    "menu": "M4 6h16M4 12h16M4 18h16",
    "close": "M6 18L18 6M6 6l12 12",
}


def iconBase_has(candidate: str) -> bool:
    """True when one of the tokens is the framework base class (fa, fas, far, ...)"""
    base = re.compile(rf"^{re.escape(appsettings.icon_prefix)}[srlbdt]?$")
    return any(base.match(token) for token in candidate.split())


def iconToken_normalize(candidate: str) -> Optional[str]:
    """
    Give an icon token its base class and validate its characters.

    Returns None when the token holds anything outside ``[A-Za-z0-9- ]``.

    Example:
        >>> iconToken_normalize('fa-home')
        'fa fa-home'
        >>> iconToken_normalize('javascript:alert(1)') is None
        True
    """
    candidate = " ".join(candidate.split())
    if not candidate or not _TOKEN_ALLOWED.match(candidate):
        return None
    if not iconBase_has(candidate):
        candidate = appsettings.iconClass_make(candidate)
    return candidate


def iconToken_extract(tooltip: str, classes: Iterable[str]) -> Optional[str]:
    """
    Find a node's icon token.

    Precedence: the tooltip when it contains the icon marker, else the first
    class starting with the marker, else no icon.
    """
    marker = appsettings.icon_marker
    candidate: Optional[str] = None

    if tooltip and marker in tooltip:
        candidate = tooltip.strip()
    else:
        for name in classes:
            if name.startswith(marker):
                candidate = name
                break

    if not candidate:
        return None
    return iconToken_normalize(candidate)


def iconType_detect(icon: str) -> str:
    """Classify an icon reference as fontawesome, svg, image, unicode or custom"""
    if _FONTAWESOME.match(icon):
        return ICON_FONTAWESOME
    if icon.startswith("svg-") or icon.lower().endswith(".svg"):
        return ICON_SVG
    if _IMAGE.search(icon):
        return ICON_IMAGE
    if icon.startswith("&#") or icon.startswith("\\u"):
        return ICON_UNICODE
    return ICON_CUSTOM


def svg_get(name: str, css_class: str = "", extra_attributes: Optional[dict] = None) -> str:
    """Inline SVG for one of the predefined icon names; empty string if unknown"""
    path = _SVG_PATHS.get(name)
    if path is None:
        return ""
    attributes = {
        "class": css_class,
        "xmlns": "http://www.w3.org/2000/svg",
        "fill": "none",
        "viewBox": "0 0 24 24",
        "stroke": "currentColor",
        "aria-hidden": "true",
    }
    attributes.update(extra_attributes or {})
    return (
        f"<svg{attributes_build(attributes)}>"
        f'<path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" d="{path}"/>'
        "</svg>"
    )


def svgNames_list() -> list:
    return sorted(_SVG_PATHS)


def icon_render(icon: Optional[str], css_class: str = "", fallback: Optional[str] = None) -> str:
    """
    Markup for an icon reference.

    Args:
        icon: Icon token, svg name ('svg-chevron-down'), image path or entity
        css_class: Extra class for the emitted element
        fallback: Reference used when ``icon`` is empty

    Returns:
        HTML fragment, or '' when there is nothing valid to show
    """
    icon = (icon or fallback or "").strip()
    if not icon:
        return ""

    kind = iconType_detect(icon)

    if kind == ICON_SVG:
        name = icon[len("svg-"):] if icon.startswith("svg-") else ""
        inline = svg_get(name, css_class) if name else ""
        if inline:
            return inline
        src = url_sanitize(icon)
        if src == appsettings.placeholder_url:
            return ""
        return f'<img src="{attribute_escape(src)}" alt="" class="{attribute_escape(css_class)}" aria-hidden="true">'

    if kind == ICON_IMAGE:
        src = url_sanitize(icon)
        if src == appsettings.placeholder_url:
            return ""
        classes = " ".join(c for c in ("menu-icon-image", css_class) if c)
        return f'<img src="{attribute_escape(src)}" alt="" class="{attribute_escape(classes)}" aria-hidden="true">'

    if kind == ICON_UNICODE:
        glyph = icon if _UNICODE_ENTITY.match(icon) else html_escape(icon)
        classes = " ".join(c for c in ("menu-icon-unicode", css_class) if c)
        return f'<span class="{attribute_escape(classes)}" aria-hidden="true">{glyph}</span>'

    if kind == ICON_FONTAWESOME:
        token = iconToken_normalize(icon)
    else:
        token = icon if _TOKEN_ALLOWED.match(icon) else None
    if token is None:
        return ""
    classes = " ".join(c for c in (token, css_class) if c)
    return f'<i class="{attribute_escape(classes)}" aria-hidden="true"></i>'
