"""
Sanitization boundary shared by every menu strategy

All host-provided strings (titles, URLs, classes, descriptions, tooltips)
pass through these functions before they reach emitted markup. None of them
raise on malformed input; failures degrade to a safe default instead:

    url_sanitize('javascript:alert(1)')   -> '#'
    cssClass_sanitize('a b<c> a')         -> 'a bc'
    htmlContent_sanitize('<script>x</script><em>y</em>') -> '<em>y</em>'
"""

import json
import re
import warnings
from functools import lru_cache
from html import escape
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Union

from bs4 import BeautifulSoup, Comment, MarkupResemblesLocatorWarning

from ..config import appsettings

# Titles such as "example.com" look like locators to bs4; they are markup here
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_URL_DISALLOWED = re.compile(r"[^a-zA-Z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\x80-\uffff]")
_URL_SCHEME = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)

# Checked only in strict mode
STRICT_BLOCKLIST: Sequence[re.Pattern] = (
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"data:", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"&#", re.IGNORECASE),
)

_PERCENT_OCTET = re.compile(r"%[a-fA-F0-9]{2}")
_CLASS_DISALLOWED = re.compile(r"[^A-Za-z0-9_\-]")

# Tag -> allowed attributes for menu descriptions and featured content
ALLOWED_CONTENT_TAGS: Dict[str, Set[str]] = {
    "span": {"class", "id"},
    "i": {"class", "aria-hidden"},
    "em": set(),
    "strong": set(),
    "b": set(),
}
ALLOWED_LINK_TAGS: Dict[str, Set[str]] = {
    "a": {"href", "title", "class", "target", "rel", "aria-label"},
}
# Removed together with their content
DROPPED_CONTENT_TAGS: Sequence[str] = (
    "script", "style", "iframe", "object", "embed", "noscript", "template", "svg", "math",
)


def url_clean(url: str) -> str:
    """
    Normalize a URL to the character set links may carry.

    Control characters are removed outright (browsers ignore tabs and
    newlines inside schemes), spaces are percent-encoded and any other
    character outside the URL alphabet is dropped. The function is
    idempotent.
    """
    cleaned = _CONTROL_CHARS.sub("", url)
    cleaned = cleaned.replace(" ", "%20")
    cleaned = _URL_DISALLOWED.sub("", cleaned)
    return cleaned.strip()


def urlScheme_get(url: str) -> Optional[str]:
    """Lower-cased scheme of ``url``, or None for relative references"""
    match = _URL_SCHEME.match(url)
    return match.group(1).lower() if match else None


def relativeUrl_is(url: str) -> bool:
    """True unless the URL is absolute http(s) or protocol-relative"""
    return not _ABSOLUTE_URL.match(url) and not url.startswith("//")


def urlPattern_blocked(url: str) -> bool:
    """Check ``url`` against the strict-mode block-list"""
    return any(pattern.search(url) for pattern in STRICT_BLOCKLIST)


@lru_cache(maxsize=appsettings.url_cache_size)
def _url_sanitizeCached(
    url: str, protocols: tuple, strict: bool, max_length: int, placeholder: str
) -> str:
    candidate = url.strip()
    if not candidate or len(candidate) > max_length:
        return placeholder
    if strict and urlPattern_blocked(candidate):
        return placeholder

    cleaned = url_clean(candidate)
    if not cleaned or len(cleaned) > max_length:
        return placeholder
    if strict and urlPattern_blocked(cleaned):
        return placeholder

    scheme = urlScheme_get(cleaned)
    if scheme is None:
        # Protocol-relative references carry a foreign host without a scheme check
        return cleaned if relativeUrl_is(cleaned) else placeholder

    if scheme not in protocols:
        return placeholder
    if scheme in ("http", "https") and not re.match(r"^https?://[^/?#]+", cleaned, re.IGNORECASE):
        return placeholder
    return cleaned


def url_sanitize(
    url: Any,
    allowed_protocols: Optional[Iterable[str]] = None,
    strict: Optional[bool] = None,
) -> str:
    """
    Sanitize a link target.

    Args:
        url: Raw URL from the host (any type; None and non-strings are tolerated)
        allowed_protocols: Schemes to accept (default: appsettings.allowed_protocols)
        strict: Also reject script markers and event-handler patterns
            (default: appsettings.strict_mode)

    Returns:
        A safe URL, or the placeholder URL when the input is empty, too long,
        blocked or uses a scheme outside ``allowed_protocols``. Never empty,
        never raises. Relative paths are accepted without a scheme check.

    Results are memoized per distinct input, and
    ``url_sanitize(url_sanitize(x)) == url_sanitize(x)`` holds for all x.
    """
    if url is None:
        return appsettings.placeholder_url
    if not isinstance(url, str):
        url = str(url)

    if allowed_protocols is None:
        protocols = appsettings.protocols_get()
    else:
        protocols = tuple(p.strip().lower() for p in allowed_protocols if p and p.strip())
    if strict is None:
        strict = appsettings.strict_mode

    return _url_sanitizeCached(
        url, protocols, bool(strict), appsettings.url_max_length, appsettings.placeholder_url
    )


def urlCache_clear() -> None:
    """Drop memoized URL results (settings changes do not invalidate them)"""
    _url_sanitizeCached.cache_clear()


def className_sanitize(token: str) -> str:
    """Strip percent-encoded octets and every character outside [A-Za-z0-9_-]"""
    token = _PERCENT_OCTET.sub("", token)
    return _CLASS_DISALLOWED.sub("", token)


def classList_sanitize(classes: Union[str, Iterable[Any], None]) -> List[str]:
    """
    Sanitize and deduplicate a list of CSS classes, preserving first-seen order.

    Accepts a whitespace-separated string or any iterable of values; empty and
    rejected tokens are dropped. The joined input is truncated to
    appsettings.class_max_length before splitting.
    """
    if not classes:
        return []
    if isinstance(classes, str):
        text = classes
    else:
        text = " ".join(str(c) for c in classes if c is not None and c != "")

    text = text[: appsettings.class_max_length]

    result: List[str] = []
    for token in text.split():
        clean = className_sanitize(token)
        if clean and clean not in result:
            result.append(clean)
    return result


def cssClass_sanitize(classes: Union[str, Iterable[Any], None]) -> str:
    """Space-joined form of classList_sanitize()"""
    return " ".join(classList_sanitize(classes))


def _soup_make(content: str) -> BeautifulSoup:
    soup = BeautifulSoup(content, "html.parser")
    for tag in soup.find_all(list(DROPPED_CONTENT_TAGS)):
        tag.decompose()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    return soup


def text_strip(text: Any) -> str:
    """
    Remove all markup from ``text`` and return the trimmed plain text.

    Entities are decoded; script and style bodies are dropped together with
    their tags.
    """
    if text is None:
        return ""
    text = str(text)
    if "<" not in text and "&" not in text:
        return text.strip()
    return _soup_make(text).get_text().strip()


def htmlContent_sanitize(content: Any, allow_links: bool = True) -> str:
    """
    Reduce HTML to a small inline allow-list.

    Allowed: span(class, id), i(class, aria-hidden), em, strong, b and, when
    ``allow_links`` is set, a(href, title, class, target, rel, aria-label).
    Other tags are unwrapped (their text survives); script-like tags are
    removed with their content. Link targets go through url_sanitize() and
    classes through cssClass_sanitize(). Input is truncated to
    appsettings.content_max_length first.
    """
    if not content:
        return ""
    content = str(content)[: appsettings.content_max_length]

    allowed = dict(ALLOWED_CONTENT_TAGS)
    if allow_links:
        allowed.update(ALLOWED_LINK_TAGS)

    soup = _soup_make(content)
    for tag in soup.find_all(True):
        if tag.name not in allowed:
            tag.unwrap()
            continue

        attributes: Dict[str, str] = {}
        for name, value in tag.attrs.items():
            if name not in allowed[tag.name]:
                continue
            if isinstance(value, list):
                value = " ".join(value)
            if name == "href":
                value = url_sanitize(value)
            elif name == "class":
                value = cssClass_sanitize(value)
                if not value:
                    continue
            attributes[name] = value
        tag.attrs = attributes

    return str(soup).strip()


def attribute_escape(value: Any) -> str:
    """Trim and escape a value for use inside a double-quoted attribute"""
    if value is None:
        return ""
    return escape(str(value).strip(), quote=True)


def html_escape(value: Any) -> str:
    """Trim and escape a value for use as element text"""
    if value is None:
        return ""
    return escape(str(value).strip(), quote=True)


def javascript_escape(value: Any) -> str:
    """Encode a value as a JavaScript literal"""
    return json.dumps(value)


def itemId_sanitize(value: Any) -> int:
    """Non-negative integer id; anything unparseable becomes 0"""
    try:
        return abs(int(value))
    except (TypeError, ValueError):
        return 0


def depth_sanitize(depth: Any, max_depth: int = 10) -> int:
    """Clamp a depth value to [0, max_depth]"""
    try:
        depth = int(depth)
    except (TypeError, ValueError):
        return 0
    return max(0, min(depth, max_depth))
