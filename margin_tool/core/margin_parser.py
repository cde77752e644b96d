"""Regex-based parser for margin/padding values.

A single value ("component") is one of:
  10            10px
  '10.5%'       10.5% of the dimension
  '20%+10'      20% of the dimension plus 10px
  '50%-3'       50% of the dimension minus 3px
  [20, 0.4]     already parsed (pixels, fraction), trusted as-is

A full value expands CSS-style to (top, right, bottom, left):
  10                      10px on all sides
  [20, 30]                20px top/bottom, 30px right/left
  [1, 2, 3, 4]            clockwise from top
  ['10%+5', '50%-10']     mixed percent/pixel shorthand

Malformed input degrades to Marker.NO_MARGIN (zero inset) unless strict=True,
in which case InvalidMarginFormat is raised. A pre-parsed pair must have
exactly two items; any other length counts as malformed. A missing value
(None) is Marker.UNSPECIFIED, and also raises under strict=True.
"""

import json
import math
import re
from typing import Any

from margin_tool.core.types import (
    IDENTITY,
    Component,
    InvalidMarginFormat,
    MarginComponent,
    MarginSpec,
    Marker,
)

_COMPONENT_RE = re.compile(r'(\d+(?:\.\d+)?)%([+-]\d+)?', re.ASCII)


def parse_file(path: str, strict: bool = False) -> MarginSpec:
    """Parse a margin value stored as JSON on disk."""
    with open(path, encoding='utf-8') as f:
        value = json.load(f)
    return parse(value, strict=strict)


def parse_component(value: Any, strict: bool = False) -> Component:
    """Parse a single margin value into a MarginComponent (or a Marker)."""
    if value is None:
        if strict:
            raise InvalidMarginFormat('Missing margin value')
        return Marker.UNSPECIFIED
    if isinstance(value, MarginComponent):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return MarginComponent(value, 0)
    if isinstance(value, (list, tuple)) and len(value) == 2:
        # Pre-parsed (pixels, percent): trusted, not validated
        return MarginComponent(value[0], value[1])
    if isinstance(value, str):
        m = _COMPONENT_RE.fullmatch(value)
        if m:
            percent = float(m.group(1)) / 100
            pixels = int(m.group(2)) if m.group(2) else 0
            return MarginComponent(pixels, percent)
    if strict:
        raise InvalidMarginFormat(f'Invalid margin value: {value!r}')
    return Marker.NO_MARGIN


def parse(value: Any, strict: bool = False) -> MarginSpec:
    """Expand a margin value (scalar or 1/2/4-item shorthand) to a MarginSpec."""
    if not value or (isinstance(value, float) and math.isnan(value)):
        return IDENTITY
    if not isinstance(value, (list, tuple)):
        component = parse_component(value, strict)
        return MarginSpec(component, component, component, component)
    if len(value) == 1:
        component = parse_component(value[0], strict)
        return MarginSpec(component, component, component, component)
    if len(value) == 2:
        vertical = parse_component(value[0], strict)
        horizontal = parse_component(value[1], strict)
        return MarginSpec(vertical, horizontal, vertical, horizontal)
    if len(value) == 3:
        if strict:
            raise InvalidMarginFormat(f'3-value margin shorthand is not supported: {value!r}')
        # Left has nothing to read; it stays UNSPECIFIED and inset() yields NaN
        return MarginSpec(
            parse_component(value[0]),
            parse_component(value[1]),
            parse_component(value[2]),
            Marker.UNSPECIFIED,
        )
    return MarginSpec(*(parse_component(v, strict) for v in value[:4]))


def to_json(spec: MarginSpec) -> list[Any]:
    """Canonical JSON form: [pixels, percent] per side, or the marker name."""
    return [[c.pixels, c.percent] if isinstance(c, MarginComponent) else c.value for c in spec]
