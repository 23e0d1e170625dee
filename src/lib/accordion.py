"""
Accordion semantics for the mobile and overlay strategies

The server never toggles anything; it emits declarative Alpine.js
conditions and click actions matching the configured policy. The toggle
control and the container it drives are built from the same
AccordionCondition, so both always reference the same expression and the
same generated identifier.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..models.accordion import AccordionPolicy, AccordionState


@dataclass(frozen=True)
class AccordionCondition:
    """
    Open condition for the submenu owned by one node.

    Attributes:
        policy: Active accordion policy
        node_id: Id of the node owning the submenu
        depth: Depth of that node
    """
    policy: AccordionPolicy
    node_id: int
    depth: int

    def expression_get(self) -> str:
        """Alpine expression that is true while the submenu is open"""
        if self.policy is AccordionPolicy.CLASSIC:
            return f"opens[{self.depth}] === {self.node_id}"
        if self.policy is AccordionPolicy.EXCLUSIVE:
            return f"openItem === {self.node_id}"
        return "open"

    def toggle_get(self) -> str:
        """Alpine click action that flips this submenu"""
        if self.policy is AccordionPolicy.CLASSIC:
            slot = f"opens[{self.depth}]"
            return f"{slot} = ({slot} === {self.node_id} ? null : {self.node_id})"
        if self.policy is AccordionPolicy.EXCLUSIVE:
            return f"openItem = (openItem === {self.node_id} ? null : {self.node_id})"
        return "open = !open"

    def ariaExpanded_get(self) -> str:
        return f"{self.expression_get()} ? 'true' : 'false'"

    def evaluate(self, state: AccordionState) -> bool:
        """Evaluate the condition against a simulated client state"""
        if self.policy is AccordionPolicy.CLASSIC:
            return state.opens.get(self.depth) == self.node_id
        if self.policy is AccordionPolicy.EXCLUSIVE:
            return state.open_item == self.node_id
        return state.item_states.get(self.node_id, False)


def condition_make(policy: AccordionPolicy, node: Any) -> AccordionCondition:
    return AccordionCondition(policy=policy, node_id=node.id, depth=node.depth)


def state_toggle(state: AccordionState, condition: AccordionCondition) -> AccordionState:
    """
    Apply a toggle click to ``state`` the way the emitted action would.

    Classic opening replaces whatever was open at the same depth; exclusive
    opening replaces whatever was open anywhere; independent flips only the
    clicked container.
    """
    node_id = condition.node_id
    if condition.policy is AccordionPolicy.CLASSIC:
        current = state.opens.get(condition.depth)
        state.opens[condition.depth] = None if current == node_id else node_id
    elif condition.policy is AccordionPolicy.EXCLUSIVE:
        state.open_item = None if state.open_item == node_id else node_id
    else:
        state.item_states[node_id] = not state.item_states.get(node_id, False)
    return state


def submenuId_make(prefix: str, node_id: int) -> str:
    """Identifier shared by a toggle's aria-controls and its container's id"""
    return f"{prefix}-{node_id}"


def alpineData_format(data: Mapping[str, Any]) -> str:
    """
    Format a mapping as an Alpine x-data object literal.

    Example:
        >>> alpineData_format({'mobileMenuOpen': False, 'opens': {0: 12}})
        '{ mobileMenuOpen: false, opens: { 0: 12 } }'
    """
    if not data:
        return "{}"
    parts = [f"{key}: {_alpineValue_format(value)}" for key, value in data.items()]
    return "{ " + ", ".join(parts) + " }"


def _alpineValue_format(value: Any) -> str:
    if isinstance(value, Mapping):
        return alpineData_format(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value)


def rootState_make(
    policy: AccordionPolicy,
    open_submenus: Optional[Mapping[int, int]] = None,
    extra: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    x-data literal for the element enclosing the whole menu.

    Classic menus get an ``opens`` map and exclusive menus an ``openItem``
    slot, both seeded from ``open_submenus`` (depth -> node id, the active
    trail). Independent menus keep their state on each container.
    """
    data: Dict[str, Any] = dict(extra or {})
    open_submenus = dict(open_submenus or {})
    if policy is AccordionPolicy.CLASSIC:
        data["opens"] = {depth: open_submenus[depth] for depth in sorted(open_submenus)}
    elif policy is AccordionPolicy.EXCLUSIVE:
        data["openItem"] = open_submenus[min(open_submenus)] if open_submenus else None
    return alpineData_format(data)


def localState_make(policy: AccordionPolicy, is_open: bool = False) -> Optional[str]:
    """x-data literal for one container; only the independent policy needs one"""
    if policy is not AccordionPolicy.INDEPENDENT:
        return None
    return alpineData_format({"open": is_open})
