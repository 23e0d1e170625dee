"""
Accordion policy and client state models

The policy decides how many submenus may be open at once. AccordionState
mirrors the client-side open-tracking variables so the emitted conditions
can be evaluated (and tested) on the server.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


class AccordionPolicy(Enum):
    """
    Accordion open/close policies

    CLASSIC: one open submenu per depth level (``opens[depth]``)
    INDEPENDENT: every container tracks its own ``open`` flag
    EXCLUSIVE: one open submenu in the whole tree (``openItem``)
    """
    CLASSIC = "classic"
    INDEPENDENT = "independent"
    EXCLUSIVE = "exclusive"

    @classmethod
    def policy_fromOptions(cls, options: Any, key: str = "accordion_mode") -> "AccordionPolicy":
        """Read the policy from a RenderOptions-like object, defaulting to CLASSIC"""
        return cls(options.str_get(key, cls.CLASSIC.value) or cls.CLASSIC.value)


@dataclass
class AccordionState:
    """
    Snapshot of the client-side open-tracking variables.

    Attributes:
        opens: depth -> open node id (classic)
        open_item: the single open node id (exclusive)
        item_states: node id -> open flag (independent, one per container)
    """
    opens: Dict[int, Optional[int]] = field(default_factory=dict)
    open_item: Optional[int] = None
    item_states: Dict[int, bool] = field(default_factory=dict)
