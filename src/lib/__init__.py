"""
menuwalk - Navigation menu rendering engine

Walker strategies that turn a host's menu tree into accessible markup.
"""

__version__ = "1.0.0"
__author__ = "Rudolph Pienaar"
__email__ = "rudolph.pienaar@gmail.com"

from .renderer import MenuRenderer
from .registry import VariantRegistry, VariantError, VariantNotFoundError
from .document import MenuDocument, DocumentError
from .traversal import tree_walk, items_flatten
from .log import LOG, state_connectToLogger

__all__ = [
    "MenuRenderer",
    "VariantRegistry",
    "VariantError",
    "VariantNotFoundError",
    "MenuDocument",
    "DocumentError",
    "tree_walk",
    "items_flatten",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
