"""Shared types for margin-tool: MarginComponent, MarginSpec, Rect, Zone, Report, Technique."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from PIL import Image


class InvalidMarginFormat(ValueError):
    """Raised by strict parsing when a margin value does not fit the grammar."""


class Marker(enum.Enum):
    """Sentinels returned by parse_component when no component can be built."""

    NO_MARGIN = 'no-margin'  # malformed input, counts as zero inset
    UNSPECIFIED = 'unspecified'  # value missing, poisons arithmetic with NaN


@dataclass(frozen=True)
class MarginComponent:
    """One side's inset: `pixels + percent * dimension`.

    `percent` is a fraction (0.105 for '10.5%'), not a percentage.
    """

    pixels: float
    percent: float = 0.0

    def resolve(self, dimension: float) -> float:
        return self.pixels + self.percent * dimension


Component = MarginComponent | Marker


class MarginSpec(NamedTuple):
    """Four components, clockwise from top like the CSS shorthand."""

    top: Component
    right: Component
    bottom: Component
    left: Component


ZERO = MarginComponent(0, 0)
IDENTITY = MarginSpec(ZERO, ZERO, ZERO, ZERO)


@dataclass
class Rect:
    """A mutable rectangle, top-left origin."""

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """(x1, y1, x2, y2) rounded to whole pixels, as PIL's crop() wants."""
        return (
            round(self.x),
            round(self.y),
            round(self.x + self.width),
            round(self.y + self.height),
        )


@dataclass
class Zone:
    """A named rectangle with the margin spec to apply and an optional source image.

    `rect` is None for the lone `margin` zone built when only the spec is wanted.
    """

    name: str
    rect: Rect | None
    spec: MarginSpec = IDENTITY
    image: Image.Image | None = None  # full source image, not cropped


class Technique:
    """A self-registering operation run over zones.

    Usage in a technique module:

        technique = Technique(name='crop', help='Crop the inset rectangle', needs_image=True)

        @technique.run
        def run(zones, report, args):
            ...
    """

    def __init__(self, name: str, help: str = '', needs_image: bool = False, needs_rect: bool = True):
        self.name = name
        self.help = help
        self.needs_image = needs_image
        self.needs_rect = needs_rect
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, zones: list[Zone], report: Report, args: Any) -> None:
        """Execute the technique's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Technique {self.name} has no run function')
        self._run_fn(zones, report, args)


@dataclass
class Report:
    """Accumulates results from techniques for text/JSON output."""

    margin: list[Any] = field(default_factory=list)  # raw margin values as given
    image_path: str | None = None
    image_width: int = 0
    image_height: int = 0
    zones: dict[str, dict[str, Any]] = field(default_factory=dict)
    pass_count: int = 0
    fail_count: int = 0

    def add(self, zone_name: str, technique_name: str, data: dict[str, Any]) -> None:
        """Add technique results for a zone."""
        if zone_name not in self.zones:
            self.zones[zone_name] = {'rect': None, 'techniques': {}}
        self.zones[zone_name]['techniques'][technique_name] = data

    def set_rect(self, zone_name: str, rect: Rect | None) -> None:
        """Set the outer rectangle for a zone in the report."""
        if zone_name not in self.zones:
            self.zones[zone_name] = {'rect': None, 'techniques': {}}
        self.zones[zone_name]['rect'] = [rect.x, rect.y, rect.width, rect.height] if rect is not None else None

    def record_pass(self, zone_name: str) -> None:
        self.pass_count += 1

    def record_fail(self, zone_name: str) -> None:
        self.fail_count += 1
