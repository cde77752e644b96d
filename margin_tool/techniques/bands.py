"""Check that the four margin bands of the image are blank.

The band for each side is the strip between the zone's outer rectangle
and its inset rectangle. Each band is converted to RGB and checked with
numpy: it counts as blank when every channel's standard deviation is at
most the threshold (--blank-threshold, MARGIN_TOOL_BLANK_THRESHOLD,
default 8). Each non-empty band records a pass or a fail, and the CLI
exits 1 if any band fails.

Useful for catching content that bleeds into a page or card margin.

Example:
    margin-tool bands 10% --image card.png
    margin-tool bands 20 40 --image page.png --rect 0 0 800 600 --json
"""

import math

import numpy as np

from margin_tool.core.env import DEFAULT_BLANK_THRESHOLD
from margin_tool.core.inset import inset
from margin_tool.core.types import Rect, Report, Technique, Zone

technique = Technique(
    name='bands',
    help='Check each margin band of --image is a single flat colour.',
    needs_image=True,
)


def _band_boxes(outer: Rect, inner: Rect) -> dict[str, tuple[int, int, int, int]]:
    """PIL crop boxes (x1, y1, x2, y2) for each side's band."""
    ox1, oy1, ox2, oy2 = outer.bounds
    ix1, iy1, ix2, iy2 = inner.bounds
    return {
        'top': (ox1, oy1, ox2, iy1),
        'right': (ix2, iy1, ox2, iy2),
        'bottom': (ox1, iy2, ox2, oy2),
        'left': (ox1, iy1, ix1, iy2),
    }


def _hex(rgb: np.ndarray) -> str:
    r, g, b = (int(round(float(c))) for c in rgb)
    return f'#{r:02x}{g:02x}{b:02x}'


def measure_band(arr: np.ndarray, threshold: float) -> dict:
    """Mean colour and spread of an (h, w, 3) pixel array."""
    pixels = arr.reshape(-1, 3).astype(np.float64)
    std = pixels.std(axis=0)
    max_std = round(float(std.max()), 2)
    return {
        'pixels': int(len(pixels)),
        'mean': _hex(pixels.mean(axis=0)),
        'std': max_std,
        'blank': bool(max_std <= threshold),
    }


@technique.run
def run(zones: list[Zone], report: Report, args) -> None:
    threshold = getattr(args, 'blank_threshold', None)
    if threshold is None:
        threshold = DEFAULT_BLANK_THRESHOLD

    for zone in zones:
        if zone.image is None:
            continue
        inner = inset(zone.spec, zone.rect)
        if not all(math.isfinite(v) for v in (inner.x, inner.y, inner.width, inner.height)):
            report.add(zone.name, 'bands', {'error': 'inset rectangle is not finite'})
            continue

        image = zone.image.convert('RGB')
        bands: dict[str, dict] = {}
        for side, (x1, y1, x2, y2) in _band_boxes(zone.rect, inner).items():
            if x2 <= x1 or y2 <= y1:
                # zero-width margin or an outset: nothing to sample
                continue
            band = measure_band(np.array(image.crop((x1, y1, x2, y2))), threshold)
            bands[side] = band
            if band['blank']:
                report.record_pass(zone.name)
            else:
                report.record_fail(zone.name)

        report.add(zone.name, 'bands', {'threshold': threshold, 'bands': bands})
