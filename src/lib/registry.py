"""
Variant registry for menuwalk

Maps variant keys to VariantSpec objects. Each spec names the strategy that
renders the items and the wrapper that encloses them. The registry is an
explicit value: build one at startup and hand it to MenuRenderer.
"""

from typing import Any, Dict, List, Optional

from ..models.accordion import AccordionPolicy
from ..models.context import RenderContext
from ..models.options import RenderOptions
from ..models.variants import VariantCategory, VariantSpec
from .accordion import rootState_make
from .icons import svg_get
from .markup import attributes_build, element_build
from .security import html_escape
from .strategies import (
    DesktopStrategy,
    DropdownStrategy,
    MenuStrategy,
    MobileAccordionStrategy,
    MultiColumnStrategy,
    OverlayStrategy,
    SimpleStrategy,
)


class VariantError(Exception):
    """Raised when a variant specification is invalid"""
    pass


class VariantNotFoundError(KeyError):
    """Raised when a render asks for a variant key that is not registered"""

    def __init__(self, name: str, available: List[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown menu variant '{self.name}'. Available: {', '.join(self.available)}"


def list_wrap(items_html: str, options: RenderOptions, extra: Optional[Dict[str, Any]] = None) -> str:
    """``<ul>`` wrapper driven by menu_id / menu_class / aria_label options"""
    attributes: Dict[str, Any] = {
        "id": options.str_get("menu_id"),
        "class": options.cssClass_get("menu_class"),
        "aria-label": options.str_get("aria_label"),
    }
    attributes.update(extra or {})
    return element_build("ul", items_html, attributes)


def overlay_wrap(items_html: str, options: RenderOptions, context: RenderContext, provide_state: bool) -> str:
    """
    Dialog container for overlay menus.

    With ``provide_state`` the container owns ``mobileMenuOpen`` and the
    accordion state; otherwise it relies on an enclosing element for both.
    """
    attributes: Dict[str, Any] = {
        "id": options.str_get("container_id"),
        "class": options.cssClass_get("container_class"),
        "role": "dialog",
        "aria-modal": "true",
        "aria-label": options.str_get("aria_label"),
    }
    if provide_state:
        attributes["x-data"] = accordionState_get(context, {"mobileMenuOpen": False})
    attributes.update({
        "x-show": "mobileMenuOpen",
        "x-cloak": True,
        "x-transition.opacity": True,
        "@keydown.escape.window": "mobileMenuOpen = false",
    })

    close_button = ""
    if options.bool_get("show_close_button"):
        close_button = element_build("button", svg_get("close", "mobile-menu-close-icon"), {
            "type": "button",
            "class": "mobile-menu-close",
            "aria-label": options.str_get("close_label"),
            "@click": "mobileMenuOpen = false",
        })

    nav = element_build("nav", items_html, {"class": options.cssClass_get("nav_class")})
    return element_build("div", close_button + nav, attributes)


def accordionState_get(context: RenderContext, extra: Optional[Dict[str, Any]] = None) -> str:
    """Root x-data for an accordion menu, seeded with the submenus open on first paint"""
    policy = AccordionPolicy.CLASSIC
    if context.options is not None and "accordion_mode" in context.options:
        policy = AccordionPolicy.policy_fromOptions(context.options)
    return rootState_make(policy, context.openSubmenus_get(), extra)


class VariantRegistry:
    """
    Registry of menu variant specifications

    Maps variant names (and aliases) to VariantSpec objects.
    """

    def __init__(self, builtins: bool = True) -> None:
        """Initialize the registry and, unless disabled, register the built-in variants"""
        self.specs: Dict[str, VariantSpec] = {}
        if builtins:
            self.genericVariants_register()
            self.desktopVariants_register()
            self.mobileVariants_register()

    def register(self, spec: VariantSpec) -> None:
        """
        Register a variant specification.

        Raises:
            VariantError: if the strategy is not a MenuStrategy subclass
            OptionsError: if the presets name keys the strategy does not define
        """
        if not isinstance(spec.strategy, type) or not issubclass(spec.strategy, MenuStrategy):
            raise VariantError(f"Variant '{spec.name}': strategy must be a MenuStrategy subclass")
        spec.strategy.options_make(spec.presets)
        RenderOptions(spec.defaults, name=f"'{spec.name}' option")

        self.specs[spec.name] = spec
        for alias in spec.aliases:
            self.specs[alias] = spec

    def unregister(self, name: str) -> None:
        spec = self.specs.get(name)
        if spec is None:
            return
        for key in [spec.name, *spec.aliases]:
            self.specs.pop(key, None)

    def has(self, name: str) -> bool:
        return name in self.specs

    def spec_get(self, name: str) -> Optional[VariantSpec]:
        """Get full variant specification by name"""
        return self.specs.get(name)

    def variant_resolve(self, name: str) -> VariantSpec:
        """Like spec_get(), but an unknown key raises VariantNotFoundError"""
        spec = self.spec_get(name)
        if spec is None:
            raise VariantNotFoundError(name, self.variants_list())
        return spec

    def variants_list(self) -> List[str]:
        """Registered variant names (aliases excluded)"""
        return sorted({spec.name for spec in self.specs.values()})

    def variants_listByCategory(self, category: VariantCategory) -> List[VariantSpec]:
        """Get all variants in a category"""
        seen: Dict[str, VariantSpec] = {}
        for spec in self.specs.values():
            if spec.category == category:
                seen[spec.name] = spec
        return [seen[name] for name in sorted(seen)]

    def strategy_make(self, name: str, extra_options: Optional[Dict[str, Any]] = None) -> MenuStrategy:
        """Instantiate the variant's strategy with presets and caller overrides applied"""
        spec = self.variant_resolve(name)
        options = spec.strategy.options_make({**spec.presets, **dict(extra_options or {})})
        return spec.strategy(options)

    def genericVariants_register(self) -> None:
        """Register simple and dropdown variants"""

        def simple_wrapper(items_html: str, options: RenderOptions, context: RenderContext) -> str:
            return list_wrap(items_html, options)

        def dropdown_wrapper(items_html: str, options: RenderOptions, context: RenderContext) -> str:
            return list_wrap(items_html, options, {"role": "menu" if options.bool_get("menu_role") else None})

        self.register(VariantSpec(
            name="simple",
            category=VariantCategory.GENERIC,
            description="Flat list of top-level links",
            strategy=SimpleStrategy,
            wrapper=simple_wrapper,
            defaults={"menu_id": "simple-menu", "menu_class": "simple-menu", "aria_label": "Menu"},
            examples=["renderer.render('simple', 'footer')"],
        ))

        self.register(VariantSpec(
            name="dropdown",
            category=VariantCategory.GENERIC,
            description="Vertical nested dropdown opened on hover",
            strategy=DropdownStrategy,
            wrapper=dropdown_wrapper,
            defaults={
                "menu_id": "dropdown-menu",
                "menu_class": "dropdown-menu",
                "aria_label": "Menu",
                "menu_role": False,
            },
            examples=["renderer.render('dropdown', 'primary', extra_options={'max_depth': 3})"],
        ))

    def desktopVariants_register(self) -> None:
        """Register desktop menubar and multi-column variants"""

        def desktop_wrapper(items_html: str, options: RenderOptions, context: RenderContext) -> str:
            return list_wrap(items_html, options, {"role": "menubar"})

        def columns_wrapper(items_html: str, options: RenderOptions, context: RenderContext) -> str:
            return list_wrap(items_html, options)

        columns_defaults = {
            "menu_id": "multi-column-menu",
            "menu_class": "multi-column-menu",
            "aria_label": "Main navigation",
        }

        self.register(VariantSpec(
            name="desktop",
            category=VariantCategory.DESKTOP,
            description="Horizontal menubar with hover dropdowns",
            strategy=DesktopStrategy,
            wrapper=desktop_wrapper,
            defaults={
                "menu_id": "desktop-menu",
                "menu_class": "desktop-menu horizontal-menu",
                "aria_label": "Main navigation",
            },
            examples=["renderer.render('desktop', 'primary')"],
        ))

        self.register(VariantSpec(
            name="multi-column-desktop",
            category=VariantCategory.DESKTOP,
            description="Menubar whose dropdowns are three-column panels",
            strategy=MultiColumnStrategy,
            wrapper=columns_wrapper,
            defaults=dict(columns_defaults),
            presets={"columns": 3},
            aliases=["multi-column"],
        ))

        self.register(VariantSpec(
            name="two-column-desktop",
            category=VariantCategory.DESKTOP,
            description="Menubar whose dropdowns are two-column panels",
            strategy=MultiColumnStrategy,
            wrapper=columns_wrapper,
            defaults={**columns_defaults, "menu_id": "two-column-menu", "menu_class": "two-column-menu"},
            presets={"columns": 2},
        ))

        self.register(VariantSpec(
            name="mega-menu",
            category=VariantCategory.DESKTOP,
            description="Four-column mega panels with section headers and descriptions",
            strategy=MultiColumnStrategy,
            wrapper=columns_wrapper,
            defaults={**columns_defaults, "menu_id": "mega-menu", "menu_class": "mega-menu-bar"},
            presets={"columns": 4, "show_column_headers": True, "enable_descriptions": True},
        ))

    def mobileVariants_register(self) -> None:
        """Register mobile accordion and overlay variants"""

        def mobile_wrapper(items_html: str, options: RenderOptions, context: RenderContext) -> str:
            attributes: Dict[str, Any] = {
                "id": options.str_get("menu_id"),
                "class": options.cssClass_get("menu_class"),
                "aria-label": options.str_get("aria_label"),
            }
            if options.bool_get("provide_state"):
                attributes["x-data"] = accordionState_get(context)
            return element_build("nav", items_html, attributes)

        def overlay_wrapper(items_html: str, options: RenderOptions, context: RenderContext) -> str:
            return overlay_wrap(items_html, options, context, options.bool_get("provide_state"))

        def overlay_toggle_wrapper(items_html: str, options: RenderOptions, context: RenderContext) -> str:
            container_id = options.str_get("container_id")
            label = options.str_get("toggle_label")
            button = element_build(
                "button",
                svg_get("menu", "mobile-menu-toggle-icon") + f'<span class="sr-only">{html_escape(label)}</span>',
                {
                    "type": "button",
                    "class": options.cssClass_get("toggle_class"),
                    "aria-controls": container_id,
                    "x-bind:aria-expanded": "mobileMenuOpen ? 'true' : 'false'",
                    "@click": "mobileMenuOpen = !mobileMenuOpen",
                },
            )
            overlay = overlay_wrap(items_html, options, context, provide_state=False)
            wrapper_attributes = attributes_build({
                "class": options.cssClass_get("wrapper_class"),
                "x-data": accordionState_get(context, {"mobileMenuOpen": False}),
            })
            return f"<div{wrapper_attributes}>{button}{overlay}</div>"

        overlay_defaults = {
            "container_id": "mobile-menu-overlay",
            "container_class": "mobile-menu-overlay",
            "nav_class": "mobile-menu-nav",
            "aria_label": "Mobile navigation",
            "show_close_button": True,
            "close_label": "Close menu",
        }

        self.register(VariantSpec(
            name="mobile",
            category=VariantCategory.MOBILE,
            description="Vertical accordion for small screens",
            strategy=MobileAccordionStrategy,
            wrapper=mobile_wrapper,
            defaults={
                "menu_id": "mobile-menu",
                "menu_class": "mobile-menu vertical-menu",
                "aria_label": "Mobile navigation",
                "provide_state": True,
            },
            examples=["renderer.render('mobile', 'primary', extra_options={'accordion_mode': 'exclusive'})"],
            aliases=["mobile-accordion"],
        ))

        self.register(VariantSpec(
            name="overlay-mobile",
            category=VariantCategory.MOBILE,
            description="Full-screen overlay with accordion submenus",
            strategy=OverlayStrategy,
            wrapper=overlay_wrapper,
            defaults={**overlay_defaults, "provide_state": True},
        ))

        self.register(VariantSpec(
            name="overlay-mobile-with-toggle",
            category=VariantCategory.MOBILE,
            description="Overlay menu preceded by the button that opens it",
            strategy=OverlayStrategy,
            wrapper=overlay_toggle_wrapper,
            defaults={
                **overlay_defaults,
                "wrapper_class": "mobile-menu-wrapper",
                "toggle_class": "mobile-menu-toggle-button",
                "toggle_label": "Open menu",
            },
        ))
