"""Crop the inset rectangle out of the image and save it as a PNG.

Requires --image. Saves to <out>/<zone_name>.png (out defaults to the
current directory). Zones whose inset rectangle is empty or not finite
are reported and skipped.

Example:
    margin-tool crop 5% --image screenshot.png --out ./tmp
"""

import math
import os

from margin_tool.core.inset import inset
from margin_tool.core.types import Report, Technique, Zone

technique = Technique(
    name='crop',
    help='Crop the inset rectangle from --image. Save each zone as a separate PNG.',
    needs_image=True,
)


@technique.run
def run(zones: list[Zone], report: Report, args) -> None:
    out_dir = getattr(args, 'out', None) or '.'
    os.makedirs(out_dir, exist_ok=True)
    for zone in zones:
        if zone.image is None:
            continue
        inner = inset(zone.spec, zone.rect)
        if not all(math.isfinite(v) for v in (inner.x, inner.y, inner.width, inner.height)):
            report.add(zone.name, 'crop', {'error': 'inset rectangle is not finite'})
            continue
        if inner.width <= 0 or inner.height <= 0:
            report.add(zone.name, 'crop', {'error': 'inset rectangle is empty'})
            continue
        crop = zone.image.crop(inner.bounds)
        path = os.path.join(out_dir, f'{zone.name}.png')
        crop.save(path)
        report.add(zone.name, 'crop', {'file': path, 'width': crop.width, 'height': crop.height})
