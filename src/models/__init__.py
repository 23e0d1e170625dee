"""
Models package for menuwalk

Contains the data structures passed between the renderer, the strategies
and the CLI pipeline.
"""

from .state import ProgramState, pipeline
from .node import MenuNode
from .options import RenderOptions, OptionsError, ACCORDION_MODES
from .accordion import AccordionPolicy, AccordionState
from .context import RenderContext, BufferedChild
from .variants import VariantSpec, VariantCategory, RenderRequest, RenderResult

__all__ = [
    "ProgramState",
    "pipeline",
    "MenuNode",
    "RenderOptions",
    "OptionsError",
    "ACCORDION_MODES",
    "AccordionPolicy",
    "AccordionState",
    "RenderContext",
    "BufferedChild",
    "VariantSpec",
    "VariantCategory",
    "RenderRequest",
    "RenderResult",
]
