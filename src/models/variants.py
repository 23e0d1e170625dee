"""
Variant specification and render request models

A variant is what callers ask for by key ('mobile', 'mega-menu', ...): one
strategy class plus the markup that encloses its output and the option
presets that distinguish it from other variants on the same strategy.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


class VariantCategory(Enum):
    """
    Categories of menu variants

    Used for listing and documentation.
    """
    GENERIC = "generic"      # simple, dropdown
    DESKTOP = "desktop"      # desktop, multi-column-desktop, mega-menu
    MOBILE = "mobile"        # mobile, overlay-mobile


@dataclass
class VariantSpec:
    """
    Specification for a menu variant

    Attributes:
        name: Registry key
        category: Category for organization
        description: Human-readable description
        strategy: MenuStrategy subclass producing the item markup
        wrapper: Function (items_html, menu_options, context) -> str
            enclosing the strategy output
        defaults: Wrapper option key-set with defaults (closed)
        presets: Strategy option overrides applied before caller overrides
        examples: Example render calls
        aliases: Alternative keys
    """
    name: str
    category: VariantCategory
    description: str
    strategy: type
    wrapper: Callable[..., str]
    defaults: Dict[str, Any] = field(default_factory=dict)
    presets: Dict[str, Any] = field(default_factory=dict)
    examples: List[str] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)


@dataclass
class RenderRequest:
    """
    One render call as seen by before/after hooks.

    Before-hooks may modify any field (or return a replacement request);
    the options are validated only after all hooks have run.
    """
    variant: str
    location: str
    options: Dict[str, Any] = field(default_factory=dict)
    extra_options: Dict[str, Any] = field(default_factory=dict)

    def copy(self) -> "RenderRequest":
        return RenderRequest(self.variant, self.location, dict(self.options), dict(self.extra_options))


@dataclass
class RenderResult:
    """Markup produced by a render plus the context's diagnostics"""
    html: str
    request: RenderRequest
    stats: Dict[str, Any] = field(default_factory=dict)
    snapshot: Optional[Dict[str, Any]] = None
