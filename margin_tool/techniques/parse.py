"""Show the canonical four-sided form of the margin value.

Each side is printed as pixels plus a percentage of the dimension it
scales with (height for top/bottom, width for left/right). Malformed
values show up as 'no-margin'; a 3-value shorthand leaves the left side
'unspecified'.

Needs no --rect or --image: without them the spec is reported for a
single zone named 'margin'.

Example:
    margin-tool parse 10% 20%+5
    margin-tool parse 10 --json
    margin-tool parse 10% --rect 0 0 100 200
"""

from margin_tool.core.margin_parser import to_json
from margin_tool.core.types import Report, Technique, Zone

technique = Technique(
    name='parse',
    help='Expand the margin shorthand to [pixels, percent] per side (top, right, bottom, left).',
    needs_rect=False,
)


@technique.run
def run(zones: list[Zone], report: Report, args) -> None:
    for zone in zones:
        report.add(zone.name, 'parse', {'spec': to_json(zone.spec)})
