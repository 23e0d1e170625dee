"""
Layout strategies

One strategy per navigation layout, all implementing the same four
traversal callbacks (level_enter, item_start, item_end, level_exit).
"""

from .base import MenuStrategy
from .simple import SimpleStrategy
from .dropdown import DropdownStrategy
from .desktop import DesktopStrategy
from .mobile import MobileAccordionStrategy
from .multicolumn import MultiColumnStrategy
from .overlay import OverlayStrategy

__all__ = [
    "MenuStrategy",
    "SimpleStrategy",
    "DropdownStrategy",
    "DesktopStrategy",
    "MobileAccordionStrategy",
    "MultiColumnStrategy",
    "OverlayStrategy",
]
