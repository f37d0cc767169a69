import math
from dataclasses import dataclass, replace
from enum import Enum
from numbers import Real
from typing import Any, Dict, List


# ---------------------------------------------------------------------------
# Element State Enum — maps 1-to-1 with the renderer's colour palette
# ---------------------------------------------------------------------------
class ElementState(Enum):
    DEFAULT   = "default"     # grey
    COMPARING = "comparing"   # yellow — under direct comparison
    SWAPPING  = "swapping"    # red — just exchanged
    SORTED    = "sorted"      # green — in final (or known-ordered) position
    PIVOT     = "pivot"       # purple — algorithm-specific marker (running minimum)
    CURRENT   = "current"     # blue — key being inserted


# ---------------------------------------------------------------------------
# ArrayElement
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ArrayElement:
    """
    One bar of the visualized array.

    Attributes:
        value : Positive, finite number (the bar height).
        index : Position in the generated array. Assigned once and never
                changed, so the renderer can use it as a stable key even
                after the element moves.
        state : ElementState for this snapshot.
    """

    value: float
    index: int
    state: ElementState = ElementState.DEFAULT

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, Real):
            raise TypeError(f"Element value must be a number, got {self.value!r}")
        if not math.isfinite(self.value) or self.value <= 0:
            raise ValueError(f"Element value must be finite and > 0, got {self.value!r}")
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise TypeError(f"Element index must be an int, got {self.index!r}")
        if self.index < 0:
            raise ValueError(f"Element index must be >= 0, got {self.index}")
        if not isinstance(self.state, ElementState):
            raise TypeError(f"Element state must be an ElementState, got {self.state!r}")

    def with_state(self, state: ElementState) -> "ArrayElement":
        if state is self.state:
            return self
        return replace(self, state=state)

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "index": self.index, "state": self.state.value}


def validate_elements(elements: Any) -> List[ArrayElement]:
    """
    Boundary check for everything that enters a step generator.
    Returns a fresh list; raises TypeError on non-array input.
    """
    if not isinstance(elements, (list, tuple)):
        raise TypeError(
            f"Expected a list of ArrayElement, got {type(elements).__name__}"
        )
    for pos, el in enumerate(elements):
        if not isinstance(el, ArrayElement):
            raise TypeError(
                f"Item {pos} is {type(el).__name__}, expected ArrayElement"
            )
    return list(elements)
