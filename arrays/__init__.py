"""
arrays/
-------
Input data model for the visualizer.

    from arrays import ArrayElement, ElementState, generate_array
"""

from arrays.element import ArrayElement, ElementState, validate_elements
from arrays.generator import generate_array, elements_from_values

__all__ = [
    "ArrayElement",
    "ElementState",
    "validate_elements",
    "generate_array",
    "elements_from_values",
]
