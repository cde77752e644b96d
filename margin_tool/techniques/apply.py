"""Compute the inset rectangle for each zone.

Insets are `pixels + percent * dimension` per side. The outer rectangle
is not clamped: margins larger than the rectangle give a negative
width/height. An unspecified side (3-value shorthand) makes the inset
rectangle non-finite, which is reported as an error for that zone.

Example:
    margin-tool apply 5 10 --rect 0 0 100 200
    # inset: [10,5 80×190]
"""

import math

from margin_tool.core.inset import inset, side_insets
from margin_tool.core.types import Report, Technique, Zone

technique = Technique(
    name='apply',
    help='Apply the margin to each rectangle and report the inset rectangle.',
)


@technique.run
def run(zones: list[Zone], report: Report, args) -> None:
    for zone in zones:
        top, right, bottom, left = side_insets(zone.spec, zone.rect.width, zone.rect.height)
        if not all(math.isfinite(v) for v in (top, right, bottom, left)):
            report.add(zone.name, 'apply', {'error': 'inset rectangle is not finite'})
            continue
        inner = inset(zone.spec, zone.rect)
        report.add(
            zone.name,
            'apply',
            {
                'insets': {'top': top, 'right': right, 'bottom': bottom, 'left': left},
                'inner': [inner.x, inner.y, inner.width, inner.height],
            },
        )
