"""
Menu renderer for menuwalk

Composition root: resolves a variant from the registry, runs the caller's
before/after hooks, validates options, drives the strategy over the menu
tree and wraps the result.
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..config import appsettings
from ..models.context import RenderContext
from ..models.options import RenderOptions
from ..models.variants import RenderRequest, RenderResult
from .log import LOG, state_connectToLogger, state_disconnectFromLogger
from .registry import VariantRegistry
from .strategies import MenuStrategy
from .traversal import tree_walk

BeforeHook = Callable[[RenderRequest], Optional[RenderRequest]]
AfterHook = Callable[[str, RenderRequest], str]
TreeSource = Union[Mapping[str, Sequence[Any]], Callable[[str], Optional[Sequence[Any]]]]


class MenuRenderer:
    """
    Renders menus by variant key and tree location.

    Responsibilities:
    - Resolve the variant (unknown keys raise VariantNotFoundError)
    - Run before-hooks, which may rewrite the request
    - Validate wrapper and strategy options (unknown keys raise OptionsError)
    - Drive the strategy over the location's items with a fresh RenderContext
    - Wrap the items and run after-hooks over the markup

    Args:
        registry: Variant table (a fresh VariantRegistry when omitted)
        trees: location -> flat item list, or a callable returning the list
        before: Hooks run before every render
        after: Hooks run after every render
        cache: Optional fragment cache shared by renders
        text_filter: Host content filter for titles and tooltips
        verbosity: LOG verbosity while rendering

    Example:
        renderer = MenuRenderer(trees={'primary': items})
        html = renderer.render('mobile', 'primary', extra_options={'accordion_mode': 'exclusive'})
    """

    def __init__(
        self,
        registry: Optional[VariantRegistry] = None,
        trees: Optional[TreeSource] = None,
        before: Optional[Iterable[BeforeHook]] = None,
        after: Optional[Iterable[AfterHook]] = None,
        cache: Optional[Any] = None,
        text_filter: Optional[Callable[[str, int], str]] = None,
        verbosity: int = 0,
    ) -> None:
        self.registry = registry if registry is not None else VariantRegistry()
        self.trees = trees if trees is not None else {}
        self.before: List[BeforeHook] = list(before or [])
        self.after: List[AfterHook] = list(after or [])
        self.cache = cache
        self.text_filter = text_filter
        self.verbosity = verbosity

    def tree_get(self, location: str) -> Optional[Sequence[Any]]:
        """Items for ``location``, or None when the location is unknown"""
        if callable(self.trees):
            return self.trees(location)
        return self.trees.get(location)

    def context_make(self, variant: str, options: RenderOptions) -> RenderContext:
        return RenderContext(
            variant=variant,
            options=options,
            verbosity=self.verbosity,
            cache=self.cache,
            text_filter=self.text_filter,
        )

    def render(
        self,
        variant: str,
        location: str,
        options: Optional[Dict[str, Any]] = None,
        extra_options: Optional[Dict[str, Any]] = None,
        before: Sequence[BeforeHook] = (),
        after: Sequence[AfterHook] = (),
    ) -> str:
        """
        Render the menu at ``location`` with variant ``variant``.

        Args:
            variant: Registry key
            location: Tree location id
            options: Wrapper options (menu_id, menu_class, ...)
            extra_options: Strategy options (max_depth, accordion_mode, ...)
            before: Extra before-hooks for this call only
            after: Extra after-hooks for this call only

        Returns:
            Markup; empty string when the location has no menu
        """
        return self.render_detailed(variant, location, options, extra_options, before, after).html

    def render_detailed(
        self,
        variant: str,
        location: str,
        options: Optional[Dict[str, Any]] = None,
        extra_options: Optional[Dict[str, Any]] = None,
        before: Sequence[BeforeHook] = (),
        after: Sequence[AfterHook] = (),
    ) -> RenderResult:
        """render(), also returning the request as seen by the hooks and the render stats"""
        request = RenderRequest(variant, location, dict(options or {}), dict(extra_options or {}))
        for hook in [*self.before, *before]:
            result = hook(request)
            if result is not None:
                request = result

        spec = self.registry.variant_resolve(request.variant)
        menu_options = RenderOptions(spec.defaults, request.options, name=f"'{spec.name}' option")
        strategy = self.registry.strategy_make(spec.name, request.extra_options)
        context = self.context_make(spec.name, strategy.options)

        token = state_connectToLogger(context)
        try:
            LOG(f"Rendering '{spec.name}' at '{request.location}'", level=1)
            items = self.tree_get(request.location)
            if items is None:
                LOG(f"No menu assigned to location '{request.location}'", level=1)
                html = ""
            else:
                body = self.strategy_render(strategy, items, context)
                html = spec.wrapper(body, menu_options, context)
                if appsettings.debug_mode:
                    html += f"<!-- menuwalk {spec.name}: {context.stats_get()} -->"
            stats = context.stats_get()
            LOG(f"Rendered {stats['items_processed']} items ({stats['items_rejected']} rejected)", level=2)
        finally:
            state_disconnectFromLogger(token)

        for hook in [*self.after, *after]:
            html = hook(html, request)

        return RenderResult(html=html, request=request, stats=stats, snapshot=context.snapshot_create())

    def strategy_render(
        self, strategy: MenuStrategy, items: Sequence[Any], context: Optional[RenderContext] = None
    ) -> str:
        """Item markup for ``items`` without any wrapper"""
        if context is None:
            context = self.context_make(strategy.name, strategy.options)
        output: List[str] = []
        tree_walk(items, strategy, output, context, max_depth=strategy.max_depth)
        return "".join(output)
