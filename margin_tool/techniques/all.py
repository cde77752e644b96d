"""Run every technique, combine into a single report.

Runs: parse, apply.
Runs crop and bands too if --image is provided.

Example:
    margin-tool all 10 20 --rect 0 0 100 200
    margin-tool all 5% --image screenshot.png --out ./tmp --json
"""

from margin_tool.core.types import Report, Technique, Zone

technique = Technique(
    name='all',
    help='Run every technique (image techniques only with --image). Combine into a single report.',
)


@technique.run
def run(zones: list[Zone], report: Report, args) -> None:
    from margin_tool.registry import all_techniques

    has_image = any(z.image is not None for z in zones)
    for name, tech in sorted(all_techniques().items()):
        if name == 'all':
            continue
        if tech.needs_image and not has_image:
            continue
        tech.execute(zones, report, args)
