"""Apply a MarginSpec to a rectangle.

Horizontal insets scale with the width, vertical insets with the height,
like CSS percentage margins. All four insets are computed from the
rectangle as it was before the call.
"""

import math
from dataclasses import replace
from typing import Any

from margin_tool.core.types import Component, MarginComponent, MarginSpec, Marker, Rect


def _resolve(component: Component, dimension: float) -> float:
    if isinstance(component, MarginComponent):
        return component.resolve(dimension)
    if component is Marker.NO_MARGIN:
        return 0
    # UNSPECIFIED: let NaN flow through instead of guessing a value
    return math.nan


def side_insets(spec: MarginSpec, width: float, height: float) -> tuple[float, float, float, float]:
    """Absolute (top, right, bottom, left) insets in pixels."""
    return (
        _resolve(spec.top, height),
        _resolve(spec.right, width),
        _resolve(spec.bottom, height),
        _resolve(spec.left, width),
    )


def apply(spec: MarginSpec, rect: Any) -> None:
    """Shrink `rect` in place. Works on anything with x, y, width and height."""
    top, right, bottom, left = side_insets(spec, rect.width, rect.height)
    rect.x += left
    rect.y += top
    rect.width -= left + right
    rect.height -= top + bottom


def inset(spec: MarginSpec, rect: Rect) -> Rect:
    """Return a new, shrunk Rect. `rect` is left untouched."""
    result = replace(rect)
    apply(spec, result)
    return result
